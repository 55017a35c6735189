from core.export import csv_response, sections_to_csv


def test_sections_to_csv_formats_cells():
    text = sections_to_csv([
        (["a", "b", "c"], [[1, None, 2.5], ["x,y", 'say "hi"', 3.0]]),
        (["d"], [["line\nbreak"]]),
    ])

    assert text == 'a,b,c\n1,,2.5\n"x,y","say ""hi""",3\n\nd\n"line\nbreak"\n'


def test_csv_response_sets_download_headers():
    response = csv_response([(["a"], [[1]])], "report.csv")

    assert response["Content-Disposition"] == 'attachment; filename="report.csv"'
    assert response.content.decode("utf-8") == "\ufeffa\n1\n"
