"""Sets up fixtures general to the entire test suite of this package.

This file is read during the collection phase of pytest when running anything
inside this directory.
"""

import pytest

# Raw event records used by the reader, driver and CLI tests. The first event
# is an upward decay in layer 4, the second a through-going muon followed by
# an afterpulse in layer 0, the third a lone top layer hit.
EVENT_TEXT = """###
1 31 50
2 16 5050
###
1 63 100
2 1 200
###
1 1 10
###
"""


@pytest.fixture(name="event_text")
def fixture_event_text():
    """Raw text of a small event file."""
    return EVENT_TEXT


@pytest.fixture(name="event_file")
def fixture_event_file(tmp_path, event_text):
    """Writes a small event file to a temporary location.

    Parameters
    ----------
    tmp_path : str
       Generic pytest fixture used to handle temporary test files
    event_text : str
       Content of the file
    """
    path = tmp_path / "events.txt"
    path.write_text(event_text)

    return str(path)
