import locale

import pytest

# Q3 rows come after Q4 on purpose: the latest quarter is picked by key, not position.
SAMPLE_CSV = """Quarter,Organisation,Patients,Members
2025-Q4,Alcor,"1,234",1500
2025-Q4,Cryonics Institute,250,—
2025-Q4,TOTAL,9999,9999
2025-Q4,Unknown Org,#N/A,10
2025-Q4,,5,5
,Alcor,1,1
2025-Q3,Alcor,200,300
2025-Q3,Cryonics Institute,240,1800
"""


@pytest.fixture
def sample_text():
    return SAMPLE_CSV


@pytest.fixture
def sample_csv(tmp_path):
    p = tmp_path / "data.csv"
    p.write_text(SAMPLE_CSV, encoding="utf-8")
    return p


@pytest.fixture(autouse=True)
def c_locale(monkeypatch):
    """main() picks LC_COLLATE / LC_NUMERIC up from the environment; pin it to C."""
    monkeypatch.setenv("LC_ALL", "C")
    saved = {cat: locale.setlocale(cat) for cat in (locale.LC_COLLATE, locale.LC_NUMERIC)}
    yield
    for cat, value in saved.items():
        locale.setlocale(cat, value)
