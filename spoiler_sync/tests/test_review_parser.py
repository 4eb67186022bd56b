"""
Tests for review_parser module.
"""
from spoiler_sync.src.models import CardReview
from spoiler_sync.src.review_parser import (
    LSV_SCALE,
    ReviewParser,
    describe_rating,
    review_to_comment,
)


REVIEW_HTML = '''
<div class="entry">
  <h1>Shadows over Innistrad Limited Set Review: White</h1>
  <h2>Archangel Avacyn</h2>
  <p><img src="avacyn.jpg"></p>
  <h3>Limited: 5.0</h3>
  <p>Flavor: She is back.</p>
  <p>Avacyn is a bomb.</p>
  <p>Play her.</p>
  <h2>Thraben Inspector</h2>
  <p><img src="inspector.jpg"></p>
  <h3>Limited:  3.0 </h3>
  <p>Solid common.</p>
  <h2>Town Gossipmonger // Incited Rabble</h2>
  <p><img src="gossip.jpg"></p>
  <h3>Limited: 2.0 // 2.5</h3>
  <p>Fine.</p>
  <div>Not part of the review</div>
</div>
'''


class TestParsePage:
    """Test parse_page method."""

    def test_extracts_every_review(self):
        reviews = ReviewParser().parse_page(REVIEW_HTML)
        assert [r.name for r in reviews] == [
            "Archangel Avacyn",
            "Thraben Inspector",
            "Town Gossipmonger // Incited Rabble",
        ]

    def test_ratings_trimmed(self):
        reviews = ReviewParser().parse_page(REVIEW_HTML)
        assert [r.rating for r in reviews] == ["5.0", "3.0", "2.0 // 2.5"]

    def test_flavor_skipped_and_paragraphs_joined(self):
        review = ReviewParser().parse_page(REVIEW_HTML)[0]
        assert review.text == "Avacyn is a bomb.\n\nPlay her."

    def test_body_stops_at_different_tag(self):
        review = ReviewParser().parse_page(REVIEW_HTML)[1]
        assert review.text == "Solid common."

    def test_body_stops_at_other_element(self):
        review = ReviewParser().parse_page(REVIEW_HTML)[2]
        assert review.text == "Fine."

    def test_page_without_reviews(self):
        assert ReviewParser().parse_page("<html><body><h3>Constructed: 4.0</h3></body></html>") == []


class TestReviewToComment:
    """Test comment rendering."""

    def test_single_face(self):
        comment = review_to_comment(CardReview("Thraben Inspector", "3.0", "Solid common."))
        assert comment == f'LSV: **3.0**\n*{LSV_SCALE["3.0"]}*\n\n"Solid common."'

    def test_one_scale_line_per_face(self):
        assert describe_rating("2.0 // 2.5") == f'{LSV_SCALE["2.0"]}\n{LSV_SCALE["2.5"]}'

    def test_unknown_rating_has_empty_description(self):
        assert describe_rating("6.0") == ""
