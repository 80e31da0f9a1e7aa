from __future__ import annotations

import unittest

from app.linking.segments import URLSegment
from app.linking.url_extractor import extract_urls, normalize_href


def _joined(parts: list) -> str:
    return "".join(p.display_text if isinstance(p, URLSegment) else p for p in parts)


class UrlExtractorTestCase(unittest.TestCase):
    def test_no_url_is_single_chunk(self) -> None:
        self.assertEqual(extract_urls("Le coaching en entreprise"), ["Le coaching en entreprise"])

    def test_empty_returned_verbatim(self) -> None:
        self.assertEqual(extract_urls(""), [""])
        self.assertEqual(extract_urls(None), [None])

    def test_scheme_and_www(self) -> None:
        parts = extract_urls("Voir https://a.com/x et www.b.fr")
        self.assertEqual(
            parts,
            [
                "Voir ",
                URLSegment(display_text="https://a.com/x", href="https://a.com/x"),
                " et ",
                URLSegment(display_text="www.b.fr", href="https://www.b.fr"),
            ],
        )

    def test_bare_domain_keeps_leading_whitespace_in_text(self) -> None:
        parts = extract_urls("Site: example.org/page suite")
        self.assertEqual(
            parts,
            [
                "Site: ",
                URLSegment(display_text="example.org/page", href="https://example.org/page"),
                " suite",
            ],
        )

    def test_bare_domain_at_start(self) -> None:
        parts = extract_urls("coaching.com est un site")
        self.assertEqual(parts[0], URLSegment(display_text="coaching.com", href="https://coaching.com"))
        self.assertEqual(parts[1], " est un site")

    def test_bare_domain_needs_whitespace_before(self) -> None:
        self.assertEqual(extract_urls("l'exemple.com"), ["l'exemple.com"])

    def test_uppercase_scheme_not_prefixed(self) -> None:
        self.assertEqual(normalize_href("HTTP://X.COM"), "HTTP://X.COM")
        self.assertEqual(normalize_href("www.x.io"), "https://www.x.io")

    def test_chunks_reconstruct_text(self) -> None:
        text = "A http://x.net/a?b=1 B www.y.org C z.io D"
        self.assertEqual(_joined(extract_urls(text)), text)


if __name__ == "__main__":
    unittest.main()
