"""CSV rendering of a benchmarks report payload."""
from core.export import csv_response, sections_to_csv

OFFICE_HEADER = [
    "section", "mode", "appsActual", "appsTarget", "premiumActual", "premiumTarget",
    "appsDelta", "premiumDelta", "appsPace", "premiumPace",
]
BREAKDOWN_HEADER = [
    "section", "mode", "key", "category", "appsActual", "appsTarget",
    "premiumActual", "premiumTarget", "premiumDelta", "pacePremium",
]
PEOPLE_HEADER = [
    "section", "personId", "name", "roleName", "appsActual", "appsTarget",
    "premiumActual", "premiumTarget", "premiumDelta", "pacePremium", "expectationSource",
]


def benchmarks_sections(payload: dict) -> list:
    """``(header, rows)`` blocks for the OFFICE, BREAKDOWN and PEOPLE sections."""
    office = payload["office"]
    breakdown = payload["breakdown"]

    office_rows = [[
        "OFFICE",
        office["planMode"],
        office["appsActual"],
        office["appsTarget"],
        office["premiumActual"],
        office["premiumTarget"],
        office["appsDelta"],
        office["premiumDelta"],
        office["pace"]["appsPace"],
        office["pace"]["premiumPace"],
    ]]
    breakdown_rows = [
        ["BREAKDOWN", breakdown["mode"]] + [row[col] for col in BREAKDOWN_HEADER[2:]]
        for row in breakdown["rows"]
    ]
    people_rows = [
        ["PEOPLE"] + [person[col] for col in PEOPLE_HEADER[1:]]
        for person in payload["people"]
    ]
    return [
        (OFFICE_HEADER, office_rows),
        (BREAKDOWN_HEADER, breakdown_rows),
        (PEOPLE_HEADER, people_rows),
    ]


def export_filename(start, end) -> str:
    return f"benchmarks_{start}_to_{end}.csv"


def benchmarks_csv(payload: dict) -> str:
    return sections_to_csv(benchmarks_sections(payload))


def benchmarks_csv_response(payload: dict):
    report_range = payload["range"]
    return csv_response(
        benchmarks_sections(payload),
        export_filename(report_range["start"], report_range["end"]),
    )
