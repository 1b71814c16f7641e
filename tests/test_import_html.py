import json
import tempfile
import unittest
from pathlib import Path

from coursecal.import_html import entries_from_html, import_html

PAGE = """
<html><body>
<table>
  <tr class="TITLE_row"><td><a href="http://x/calc101">CALC 101</a></td></tr>
  <tr>
    <td>01</td><td>LEC</td><td class="TITLE_times">MWF: 9:00am - 9:50am</td><td>Rm 5</td>
    <td><a href="mailto:prof@example.edu">Prof Example</a></td>
  </tr>
  <tr class="TITLE_row_alt"><td><a href="http://x/art200">ART 200</a></td></tr>
  <tr>
    <td>01</td><td>STU</td><td class="TITLE_times">TBA</td>
  </tr>
  <tr class="TITLE_row"><td>No link here</td></tr>
  <tr><td>01</td><td>LEC</td><td class="TITLE_times">TR: 1:30pm - 2:45pm</td><td>Hall</td></tr>
  <tr class="TITLE_row"><td><a href="http://x/lab">LAB 7</a></td></tr>
  <tr><td>only one cell</td></tr>
</table>
</body></html>
"""


class TestEntriesFromHtml(unittest.TestCase):
    def test_rows_are_parsed_in_page_order(self) -> None:
        entries = entries_from_html(PAGE)
        self.assertEqual([e.course_name for e in entries], ["CALC 101", "ART 200"])

        calc = entries[0]
        self.assertEqual(calc.course_link, "http://x/calc101")
        self.assertEqual(calc.section_type, "LEC")
        self.assertEqual(calc.days, "MWF")
        self.assertEqual(calc.times, "9:00am - 9:50am")
        self.assertEqual(calc.location, "Rm 5")
        self.assertEqual(calc.instructor, "Prof Example")

    def test_missing_cells_use_defaults(self) -> None:
        art = entries_from_html(PAGE)[1]
        self.assertEqual(art.days, "")
        self.assertEqual(art.times, "")
        self.assertEqual(art.location, "N/A")
        self.assertEqual(art.instructor, "N/A")

    def test_page_without_courses(self) -> None:
        self.assertEqual(entries_from_html("<html><body><p>nothing</p></body></html>"), [])


class TestImportHtml(unittest.TestCase):
    def test_writes_entries_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            page = Path(d) / "schedule.html"
            page.write_text(PAGE, encoding="utf-8")
            out = Path(d) / "entries.json"

            n = import_html(page, out)
            self.assertEqual(n, 2)
            data = json.loads(out.read_text(encoding="utf-8"))
            self.assertEqual(data[0]["course_name"], "CALC 101")

    def test_non_utf8_page_with_declared_charset(self) -> None:
        page_html = (
            '<html><head><meta charset="windows-1252"></head><body><table>'
            '<tr class="TITLE_row"><td><a href="http://x/fr101">Café Français</a></td></tr>'
            '<tr><td>01</td><td>LEC</td><td class="TITLE_times">TR: 1:30pm - 2:45pm</td><td>Salle 3</td></tr>'
            "</table></body></html>"
        )
        with tempfile.TemporaryDirectory() as d:
            page = Path(d) / "schedule.html"
            page.write_bytes(page_html.encode("cp1252"))
            out = Path(d) / "entries.json"

            n = import_html(page, out)
            self.assertEqual(n, 1)
            data = json.loads(out.read_text(encoding="utf-8"))
            self.assertEqual(data[0]["course_name"], "Café Français")
            self.assertEqual(data[0]["days"], "TR")

    def test_non_utf8_page_without_charset(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            page = Path(d) / "schedule.html"
            page.write_bytes(PAGE.replace("CALC 101", "Café 101").encode("cp1252"))
            out = Path(d) / "entries.json"

            self.assertEqual(import_html(page, out), 2)


if __name__ == "__main__":
    unittest.main()
