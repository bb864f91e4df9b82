import pytest

from core.random_picker import extract_leading_number, pick


class TestPick:
    def test_non_empty_listing_never_returns_fallback(self):
        listing = ("a.jpg", "b.jpg", "c.jpg")
        for _ in range(200):
            assert pick(listing, "fallback.jpg") in listing

    def test_single_element(self):
        assert pick(("only.jpg",), "fallback.jpg") == "only.jpg"

    @pytest.mark.parametrize("listing", [(), [], None])
    def test_empty_or_absent_returns_fallback(self, listing):
        assert pick(listing, "Gary76.jpg") == "Gary76.jpg"

    def test_roughly_uniform(self):
        listing = ("a", "b")
        seen = {pick(listing, "x") for _ in range(200)}
        assert seen == {"a", "b"}


class TestExtractLeadingNumber:
    @pytest.mark.parametrize(
        "filename, expected",
        [
            ("Gary76.jpg", 76),
            ("noDigits.jpg", 0),
            ("v2beta3.jpg", 2),
            ("goober008.png", 8),
            ("000.gif", 0),
            ("12345", 12345),
            ("", 0),
        ],
    )
    def test_first_digit_run(self, filename, expected):
        assert extract_leading_number(filename) == expected
