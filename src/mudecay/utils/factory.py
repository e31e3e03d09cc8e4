"""Contains functions needed to instantiate a class from a dictionary.

This allows to convert a YAML block into an instantiated class (a reader, a
writer or a classification strategy) with all the appropriate checks that
the class exists and is provided with sensible arguments.
"""

from copy import deepcopy

from .logger import logger


def module_dict(module):
    """Converts a module into a dictionary which maps names onto classes.

    A class is registered under its class name, under its `name` attribute
    (if it is not empty) and under each of its `aliases`.

    Parameters
    ----------
    module : module
        Module from which to fetch the classes

    Returns
    -------
    dict
        Dictionary which maps acceptable class names to classes themselves
    """
    # Loop over the public classes of the module
    classes = {}
    for cls_name in getattr(module, "__all__", dir(module)):
        # Skip private objects
        if cls_name.startswith("_"):
            continue

        # Only consider classes which belong to the module of interest
        cls = getattr(module, cls_name)
        if not isinstance(cls, type) or module.__name__ not in cls.__module__:
            continue

        # Store the class name as an option to fetch it
        classes[cls_name] = cls

        # If a name is provided, add it to the allowed options
        if getattr(cls, "name", None):
            classes[cls.name] = cls

        # Aliases are allowed as well
        for alias in getattr(cls, "aliases", ()):
            classes[alias] = cls

    return classes


def instantiate(class_dict, cfg, **kwargs):
    """Instantiates a class based on a configuration block.

    The configuration can either be a string (the name of a class which takes
    no argument) or a dictionary of the form:

    .. code-block:: yaml

        strategy:
          name: strategy_name
          kwarg_1: value_1
          kwarg_2: value_2

    Parameters
    ----------
    class_dict : dict
        Dictionary which maps a class name onto an object class
    cfg : Union[str, dict]
        Configuration block
    **kwargs : dict, optional
        Additional parameters to pass to the class constructor

    Returns
    -------
    object
        Instantiated object
    """
    # If the configuration is a string, assume it is a class name
    if isinstance(cfg, str):
        cfg = {"name": cfg}

    # Get the name of the class, check that it exists
    config = deepcopy(cfg)
    if "name" not in config:
        raise KeyError("Could not find the name of the class under `name`.")

    class_name = config.pop("name")
    if class_name not in class_dict:
        raise ValueError(
            f"Could not find '{class_name}' in the dictionary which maps "
            f"names to classes. Available names: {list(class_dict.keys())}"
        )

    # Top-level keys are keyword arguments, check for ambiguities
    for key in config:
        if key in kwargs:
            raise KeyError(
                f"The keyword argument `{key}` is provided both in the "
                "configuration and by the caller. Ambiguous."
            )
    kwargs.update(config)

    # Initialize
    cls = class_dict[class_name]
    try:
        return cls(**kwargs)

    except Exception as err:
        logger.error(
            "Failed to instantiate %s with these arguments: %s",
            cls.__name__,
            kwargs,
        )

        raise err
