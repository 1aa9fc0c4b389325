import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

# Classic textbook reference string, simulated with three frames
TEXTBOOK_FRAMES = 3
TEXTBOOK_SEQUENCE = (7, 0, 1, 2, 0, 3, 0, 4, 2, 3, 0, 3, 2)


@pytest.fixture
def textbook():
    return TEXTBOOK_FRAMES, TEXTBOOK_SEQUENCE
