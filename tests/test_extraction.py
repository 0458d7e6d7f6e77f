"""
Tests for content extraction from cards.
"""
import pytest

from siteprobe.config import Cascades
from siteprobe.handlers import ContentExtractor, ElementLocator, category_for
from siteprobe.models import ExtractedItem
from tests.conftest import FakeElement, FakeSession


def card(**fields):
    """A content element whose children answer the first strategy of each field cascade."""
    children = {}
    for name, value in fields.items():
        if name == "url":
            children[Cascades.LINK.strategies[0].locator()] = [FakeElement("a", attrs={"href": value})]
        elif name == "image_url":
            children[Cascades.IMAGE.strategies[0].locator()] = [FakeElement("img", attrs={"src": value})]
        else:
            strategy = Cascades.FIELDS[name].strategies[0]
            children[strategy.locator()] = [FakeElement(text=value)]
    return FakeElement("article", children=children)


class TestContentExtractor:

    def test_extracts_every_field(self):
        extractor = ContentExtractor(ElementLocator(FakeSession()))
        item = extractor.extract(card(
            title="Salmon Bowl", description="Seared salmon with greens", price="$12.99",
            calories="650 cal", url="https://a.example/recipes/salmon",
            image_url="https://cdn.example/salmon.jpg",
        ), "https://a.example/keto", scraped_at="2024-01-01 10:00:00")

        assert item.title == "Salmon Bowl"
        assert item.description == "Seared salmon with greens"
        assert item.price == "$12.99"
        assert item.calories == "650 cal"
        assert item.servings == ""
        assert item.url == "https://a.example/recipes/salmon"
        assert item.image_url == "https://cdn.example/salmon.jpg"
        assert item.category == "Keto"
        assert item.source_location == "https://a.example/keto"
        assert item.scraped_at == "2024-01-01 10:00:00"

    def test_price_only_item_is_meaningful(self):
        item = ContentExtractor(ElementLocator(FakeSession())).extract(card(price="$5"), "https://a.example/")
        assert item.is_meaningful

    def test_empty_item_is_not_meaningful(self):
        item = ContentExtractor(ElementLocator(FakeSession())).extract(
            card(image_url="https://cdn.example/x.jpg"), "https://a.example/",
        )
        assert not item.is_meaningful
        assert item.category == "General"

    def test_dedup_key(self):
        assert ExtractedItem(title="A", url="/a", price="1").dedup_key == ("A", "/a", "1")


class TestCategory:

    @pytest.mark.parametrize("location, expected", [
        ("https://a.example/keto", "Keto"),
        ("https://a.example/plant-based?page=2", "Plant-Based"),
        ("https://a.example/quick-easy", "Quick & Easy"),
        ("https://a.example/pages/menus-and-plans", "Menus"),
        ("https://a.example/recipes/keto-bowl", "Keto"),
        ("https://a.example/", "General"),
    ])
    def test_category_for(self, location, expected):
        assert category_for(location) == expected

    def test_custom_keywords(self):
        assert category_for("https://b.example/vegan", (("vegan", "Vegan"),), "Other") == "Vegan"
        assert category_for("https://b.example/", (("vegan", "Vegan"),), "Other") == "Other"
