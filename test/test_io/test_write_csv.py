"""Test the CSV writer."""

import pytest

from mudecay.io import CSVWriter


class TestCSVWriter:
    """Test suite for the CSV writer."""

    def test_write(self, tmp_path):
        """Rows are written under a header made of the first row keys."""
        path = tmp_path / "log.csv"
        writer = CSVWriter(str(path))
        writer.append({"index": 0, "decay_up": 1})
        writer({"index": 1, "decay_up": 0})

        assert path.read_text() == "index,decay_up\n0,1\n1,0\n"
        assert writer.num_rows == 2

    def test_existing(self, tmp_path):
        """Existing files are only replaced if requested."""
        path = tmp_path / "log.csv"
        path.write_text("a\n1\n")
        with pytest.raises(FileExistsError):
            CSVWriter(str(path))

        writer = CSVWriter(str(path), overwrite=True)
        writer.append({"b": 2})
        assert path.read_text() == "b\n2\n"

    def test_append(self, tmp_path):
        """Rows can be added to an existing file."""
        path = tmp_path / "log.csv"
        path.write_text("a,b\n1,2\n")
        writer = CSVWriter(str(path), append=True)
        writer.append({"a": 3, "b": 4})
        assert path.read_text() == "a,b\n1,2\n3,4\n"

        with pytest.raises(FileNotFoundError):
            CSVWriter(str(tmp_path / "missing.csv"), append=True)

    def test_keys(self, tmp_path):
        """Rows must match the header keys."""
        path = tmp_path / "log.csv"
        writer = CSVWriter(str(path))
        writer.append({"a": 1, "b": 2})
        with pytest.raises(KeyError):
            writer.append({"a": 1, "b": 2, "c": 3})
        with pytest.raises(KeyError):
            writer.append({"a": 1})

        writer = CSVWriter(str(path), overwrite=True, accept_missing=True)
        writer.append({"a": 1, "b": 2})
        writer.append({"b": 5})
        assert path.read_text() == "a,b\n1,2\n-1,5\n"
