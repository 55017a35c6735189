"""CSV export utilities."""
import csv
import io

from django.http import HttpResponse


def _cell(value):
    if value is None:
        return ""
    if isinstance(value, float):
        return f"{value:.10g}"
    return str(value)


def write_sections(stream, sections):
    """Write several header+rows blocks to ``stream``, separated by a blank line.

    Args:
        stream: any file-like object accepting ``write``.
        sections: iterable of ``(header, rows)`` where ``header`` is a list of
            column labels and ``rows`` an iterable of value lists.

    Values are quoted only when they contain a comma, a quote or a line
    break; embedded quotes are doubled.
    """
    writer = csv.writer(stream, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    for index, (header, rows) in enumerate(sections):
        if index:
            stream.write("\n")
        writer.writerow(header)
        for row in rows:
            writer.writerow([_cell(value) for value in row])


def sections_to_csv(sections) -> str:
    buffer = io.StringIO()
    write_sections(buffer, sections)
    return buffer.getvalue()


def csv_response(sections, filename):
    """Build a CSV download ``HttpResponse`` from ``(header, rows)`` sections.

    ``filename`` is used as-is, extension included.
    """
    response = HttpResponse(content_type="text/csv; charset=utf-8")
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    # UTF-8 BOM for Excel compatibility
    response.write("\ufeff")
    write_sections(response, sections)
    return response
