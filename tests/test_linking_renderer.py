from __future__ import annotations

import unittest

from app.linking.renderer import SegmentRenderer
from app.linking.segments import ChoiceSegment, LinkCandidate, LinkSegment, TextSegment, URLSegment


def _choice() -> ChoiceSegment:
    return ChoiceSegment(
        primary=LinkSegment(
            label=(
                TextSegment("Intelligence "),
                LinkSegment(label=(TextSegment("Émotionnelle"),), slug="em"),
            ),
            slug="ie",
        ),
        candidates=(
            LinkCandidate(term="Intelligence Émotionnelle", slug="ie"),
            LinkCandidate(term="Émotionnelle", slug="em"),
        ),
    )


class PayloadRendererTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.renderer = SegmentRenderer(route_prefix="/fiche")

    def test_text_url_and_empty_fragments(self) -> None:
        payload = self.renderer.to_payload(
            ["", TextSegment("Voir "), None, URLSegment(display_text="www.a.fr", href="https://www.a.fr")]
        )
        self.assertEqual(
            payload,
            [
                {"type": "text", "value": "Voir "},
                {"type": "url", "text": "www.a.fr", "href": "https://www.a.fr"},
            ],
        )

    def test_choice_payload(self) -> None:
        payload = self.renderer.to_payload([_choice()])
        self.assertEqual(
            payload,
            [
                {
                    "type": "choice",
                    "primary": {
                        "type": "link",
                        "slug": "ie",
                        "href": "/fiche/ie",
                        "label": [
                            {"type": "text", "value": "Intelligence "},
                            {
                                "type": "link",
                                "slug": "em",
                                "href": "/fiche/em",
                                "label": [{"type": "text", "value": "Émotionnelle"}],
                            },
                        ],
                    },
                    "candidates": [
                        {"term": "Intelligence Émotionnelle", "slug": "ie", "href": "/fiche/ie"},
                        {"term": "Émotionnelle", "slug": "em", "href": "/fiche/em"},
                    ],
                }
            ],
        )

    def test_route_prefix_trailing_slash(self) -> None:
        self.assertEqual(SegmentRenderer(route_prefix="/terme/").href("pnl"), "/terme/pnl")

    def test_unknown_segment_rejected(self) -> None:
        with self.assertRaises(TypeError):
            self.renderer.to_payload([42])


class HtmlRendererTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.renderer = SegmentRenderer(route_prefix="/fiche", choice_title="Termes trouvés :")

    def test_text_is_escaped_and_link_rendered(self) -> None:
        html = self.renderer.to_html([TextSegment("a < b "), LinkSegment(label=(TextSegment("PNL"),), slug="pnl")])
        self.assertEqual(str(html), 'a &lt; b <a class="term-link" href="/fiche/pnl">PNL</a>')

    def test_external_link_opens_new_tab(self) -> None:
        html = str(self.renderer.to_html([URLSegment(display_text="x.com", href="https://x.com")]))
        self.assertEqual(
            html,
            '<a href="https://x.com" target="_blank" rel="noopener noreferrer" class="external-link" '
            'onclick="event.stopPropagation()">x.com</a>',
        )

    def test_choice_renders_primary_and_menu(self) -> None:
        html = str(self.renderer.to_html([_choice()]))
        self.assertTrue(html.startswith('<span class="term-choice"><a class="term-link" href="/fiche/ie">Intelligence '))
        # 嵌套链接不能是 <a>
        self.assertIn('<span class="term-link" role="link" data-href="/fiche/em">Émotionnelle</span>', html)
        self.assertIn('<span class="term-choice-title">Termes trouvés :</span>', html)
        self.assertIn('<a role="menuitem" href="/fiche/ie">Intelligence Émotionnelle</a>', html)
        self.assertIn('<a role="menuitem" href="/fiche/em">Émotionnelle</a>', html)


if __name__ == "__main__":
    unittest.main()
