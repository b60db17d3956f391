from __future__ import annotations

import unittest

from bs4 import BeautifulSoup

from custom_components.recipe_scanner.parsers.image_resolver import resolve_image


def resolve(head: str = "", body: str = "") -> str | None:
    html = f"<html><head>{head}</head><body>{body}</body></html>"
    return resolve_image(BeautifulSoup(html, "html.parser"))


class ImageResolverTests(unittest.TestCase):
    def test_open_graph_beats_img(self) -> None:
        image = resolve(
            '<meta property="og:image" content="https://example.com/og.jpg">',
            '<img src="https://example.com/inline.jpg">',
        )
        self.assertEqual(image, "https://example.com/og.jpg")

    def test_open_graph_by_name(self) -> None:
        image = resolve('<meta name="og:image" content="https://example.com/og.jpg">')
        self.assertEqual(image, "https://example.com/og.jpg")

    def test_twitter_card(self) -> None:
        image = resolve(
            '<meta property="og:image" content="">'
            '<meta name="twitter:image" content="https://example.com/tw.jpg">',
            '<img src="inline.jpg">',
        )
        self.assertEqual(image, "https://example.com/tw.jpg")

    def test_first_img(self) -> None:
        self.assertEqual(resolve(body='<img src="first.jpg"><img src="second.jpg">'), "first.jpg")
        self.assertEqual(resolve(body='<img data-src="lazy.jpg">'), "lazy.jpg")

    def test_no_image(self) -> None:
        self.assertIsNone(resolve(body="<p>Text only</p>"))
        self.assertIsNone(resolve(body="<img alt='broken'>"))


if __name__ == "__main__":
    unittest.main()
