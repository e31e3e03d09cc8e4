"""Functions that instantiate IO tools from configuration blocks."""

from mudecay.utils.factory import instantiate, module_dict

from . import read, write

READER_DICT = module_dict(read)
WRITER_DICT = module_dict(write)

__all__ = ["reader_factory", "writer_factory"]


def reader_factory(reader_cfg, **kwargs):
    """Instantiates an event reader based on the type specified in the
    configuration under `io.reader.name`.

    Parameters
    ----------
    reader_cfg : Union[str, dict]
        Reader configuration
    **kwargs : dict, optional
        Additional arguments passed to the reader (e.g. `num_layers`)

    Returns
    -------
    ReaderBase
        Reader object
    """
    return instantiate(READER_DICT, reader_cfg, **kwargs)


def writer_factory(writer_cfg, **kwargs):
    """Instantiates a writer based on the type specified in the configuration
    under `io.writer.name`.

    Parameters
    ----------
    writer_cfg : Union[str, dict]
        Writer configuration
    **kwargs : dict, optional
        Additional arguments passed to the writer

    Returns
    -------
    object
        Writer object
    """
    return instantiate(WRITER_DICT, writer_cfg, **kwargs)
