from benchmarks.export import benchmarks_csv, benchmarks_csv_response, export_filename


def _payload(name="Alice Agent"):
    return {
        "range": {"start": "2024-01-01", "end": "2024-01-31", "asOf": "2024-01-31"},
        "statuses": ["WRITTEN"],
        "office": {
            "planMode": "BUCKET",
            "appsActual": 3,
            "appsTarget": 12.0,
            "premiumActual": 1100.0,
            "premiumTarget": 3000.0,
            "appsDelta": -9.0,
            "premiumDelta": -1900.0,
            "pace": {"appsPace": 0.25, "premiumPace": 0.3667},
        },
        "breakdown": {
            "mode": "BUCKET",
            "rows": [{
                "key": "PC",
                "category": "PC",
                "appsActual": 3,
                "appsTarget": 12.0,
                "premiumActual": 1100.0,
                "premiumTarget": 3000.0,
                "premiumDelta": -1900.0,
                "pacePremium": 0.3667,
            }],
        },
        "people": [{
            "personId": "p-1",
            "name": name,
            "roleName": None,
            "appsActual": 3,
            "appsTarget": 12.0,
            "premiumActual": 1100.0,
            "premiumTarget": 3000.0,
            "premiumDelta": -1900.0,
            "pacePremium": None,
            "expectationSource": "ROLE",
        }],
    }


def test_export_filename():
    assert export_filename("2024-01-01", "2024-01-31") == "benchmarks_2024-01-01_to_2024-01-31.csv"


def test_sections_are_separated_by_blank_lines():
    blocks = benchmarks_csv(_payload()).split("\n\n")

    assert len(blocks) == 3
    assert blocks[0].splitlines() == [
        "section,mode,appsActual,appsTarget,premiumActual,premiumTarget,appsDelta,premiumDelta,appsPace,premiumPace",
        "OFFICE,BUCKET,3,12,1100,3000,-9,-1900,0.25,0.3667",
    ]
    assert blocks[1].splitlines()[1] == "BREAKDOWN,BUCKET,PC,PC,3,12,1100,3000,-1900,0.3667"
    assert blocks[2].splitlines()[1] == "PEOPLE,p-1,Alice Agent,,3,12,1100,3000,-1900,,ROLE"


def test_cells_with_commas_and_quotes_are_escaped():
    text = benchmarks_csv(_payload(name='Smith, "Jo"'))

    assert 'PEOPLE,p-1,"Smith, ""Jo""",' in text


def test_csv_response_headers():
    response = benchmarks_csv_response(_payload())

    assert response["Content-Type"] == "text/csv; charset=utf-8"
    assert response["Content-Disposition"] == 'attachment; filename="benchmarks_2024-01-01_to_2024-01-31.csv"'
    assert response.content.decode("utf-8").lstrip("\ufeff").startswith("section,mode,")
