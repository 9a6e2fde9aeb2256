"""
cryonics_core.config
Central configuration/constants.
"""
from __future__ import annotations

DEFAULT_INPUT_CSV = "data.csv"

# outputs (filenames)
DEFAULT_HTML_OUT = "index.html"
DEFAULT_EXCEL_OUT = "cryonics_organisations.xlsx"
DEFAULT_PDF_OUT = "cryonics_organisations.pdf"

REPORT_TITLE = "Cryonics Organisations"
REPORT_TIMEZONE = "UTC"

FETCH_TIMEOUT_SECONDS = 15

TABLE_HEADERS = ["Organisation", "Location", "Founded", "Patients", "Members"]

# columns at or after this index carry numeric sort metadata
NUMERIC_COLUMN_START = 3

EM_DASH = "—"
TOTAL_LABEL = "Total"

# cell values that mean "no figure reported"
MISSING_MARKERS = ("", EM_DASH, "#N/A")

DEFAULT_LOGO = "images/default.png"

# Keys are lowercase so CSV names match regardless of casing
ORG_METADATA = {
    "alcor": {
        "name": "Alcor",
        "domain": "alcor.org",
        "location": "Scottsdale, United States",
        "founded": "1972",
        "logo": "images/alcor.png",
    },
    "cryonics institute": {
        "name": "Cryonics Institute",
        "domain": "cryonics.org",
        "location": "Clinton Township, United States",
        "founded": "1976",
        "logo": "images/cryonics.png",
    },
    "kriorus": {
        "name": "KrioRus",
        "domain": "kriorus.ru/en",
        "location": "Moscow, Russia",
        "founded": "2003",
        "logo": "images/kriorus.png",
    },
    "southern cryonics": {
        "name": "Southern Cryonics",
        "domain": "southerncryonics.com",
        "location": "Holbrook, Australia",
        "founded": "2012",
        "logo": "images/southerncryonics.jpeg",
    },
    "sparks brain preservation": {
        "name": "Sparks Brain Preservation",
        "domain": "sparksbrain.org",
        "location": "Salem, United States",
        "founded": "2005",
        "logo": "images/sparksbrain.png",
    },
    "tomorrow biostasis": {
        "name": "Tomorrow Biostasis",
        "domain": "tomorrow.bio",
        "location": "Berlin, Germany & Rafz, Switzerland",
        "founded": "2020",
        "logo": "images/tomorrow.png",
    },
    "yinfeng": {
        "name": "Yinfeng",
        "domain": "en.yinfenglife.org.cn",
        "location": "Jinan, China",
        "founded": "2015",
        "logo": "images/yinfenglife.png",
    },
}
