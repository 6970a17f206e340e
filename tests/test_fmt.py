import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from mdcells.fmt import format_front_matter, format_text, update_front_matter
from mdcells.model import CellKind
from mdcells.parse import parse_text
from mdcells.serialize import serialize


class TestFmt(unittest.TestCase):
    def test_layout_and_idempotence(self):
        text = "\n\n# title\n\n\n\nintro\n```py3\nx = 1\n```\nend"
        formatted1 = format_text(text)
        formatted2 = format_text(formatted1)
        self.assertEqual(formatted1, "# title\n\nintro\n\n```py\nx = 1\n```\n\nend\n")
        self.assertEqual(formatted1, formatted2)

    def test_front_matter_keeps_comments_and_order(self):
        text = "---\n# about\nzeta:   1\nalpha:  two  # note\n---\n# body\n"
        formatted = format_text(text)
        cells = parse_text(formatted)
        self.assertEqual(cells[0].kind, CellKind.FRONT_MATTER)
        self.assertIn("# about", cells[0].content)
        self.assertIn("# note", cells[0].content)
        self.assertLess(cells[0].content.index("zeta"), cells[0].content.index("alpha"))
        self.assertEqual(cells[0].front_matter, {"zeta": 1, "alpha": "two"})
        self.assertEqual(format_text(formatted), formatted)

    def test_non_mapping_front_matter_unchanged(self):
        self.assertEqual(format_front_matter("- a\n- b"), "- a\n- b")
        self.assertEqual(format_front_matter(""), "")

    def test_impossible_date_front_matter_left_alone(self):
        text = "---\ndate: 2021-02-30\n---\nbody\n"
        self.assertEqual(format_text(text), text)
        self.assertEqual(format_front_matter("date: 2021-02-30"), "date: 2021-02-30")

    def test_empty_front_matter_is_stable(self):
        text = "---\n---\n\n# body\n"
        self.assertEqual(format_text(text), text)

    def test_blank_document(self):
        self.assertEqual(format_text(""), "")


class TestUpdateFrontMatter(unittest.TestCase):
    def test_updates_existing_front_matter(self):
        text = "---\n# keep me\ntitle: Old\n---\n\n# body\n"
        cells = parse_text(text)
        updated = update_front_matter(cells, {"title": "New", "draft": True})
        out = serialize(updated)
        self.assertTrue(out.startswith("---\n# keep me\ntitle: New\ndraft: true\n---\n"))
        self.assertTrue(out.endswith("\n\n# body\n"))
        self.assertEqual(updated[0].front_matter, {"title": "New", "draft": True})
        # input cells are not modified
        self.assertEqual(cells[0].content, "# keep me\ntitle: Old")

    def test_inserts_front_matter(self):
        cells = parse_text("# body\n")
        updated = update_front_matter(cells, {"title": "Doc"})
        self.assertEqual(len(cells), 1)
        self.assertEqual(serialize(updated), "---\ntitle: Doc\n---\n\n# body\n")
        reparsed = parse_text(serialize(updated))
        self.assertEqual(reparsed[0].front_matter, {"title": "Doc"})


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
