from scraper.cleaner import clean_review, clean_reviews


def sparse(values: dict) -> list:
    """Positional array with ``values`` at their indices and None elsewhere."""
    out = [None] * (max(values) + 1)
    for index, value in values.items():
        out[index] = value
    return out


def raw_review(review_id="ChZDSUhN", text="Great espresso", reply=None, images=None):
    review = [
        review_id,
        sparse({
            2: 1700000000000000,
            3: 1700000500000000,
            4: sparse({5: ["Alice", "https://lh3.googleusercontent.com/a/photo", ["https://www.google.com/maps/contrib/123"], "123"]}),
            13: ["Google"],
        }),
        sparse({
            0: [5],
            2: images,
            14: ["en"],
            15: [[text]],
        }),
    ]
    if reply:
        review.append(sparse({1: 1700000600000000, 2: 1700000700000000, 14: [[reply]]}))
    return [review]


def test_clean_review_extracts_fields():
    cleaned = clean_review(raw_review())

    assert cleaned["review_id"] == "ChZDSUhN"
    assert cleaned["time"] == {"published": 1700000000000000, "last_edited": 1700000500000000}
    assert cleaned["author"] == {
        "name": "Alice",
        "profile_url": "https://lh3.googleusercontent.com/a/photo",
        "url": "https://www.google.com/maps/contrib/123",
        "id": "123",
    }
    assert cleaned["review"] == {"rating": 5, "text": "Great espresso", "language": "en"}
    assert cleaned["source"] == "Google"
    assert cleaned["images"] is None
    assert cleaned["response"] is None


def test_owner_response_is_extracted():
    cleaned = clean_review(raw_review(reply="Thanks for visiting!"))

    assert cleaned["response"] == {
        "text": "Thanks for visiting!",
        "time": {"published": 1700000600000000, "last_edited": 1700000700000000},
    }


def test_images_are_extracted():
    image = ["img-1", sparse({
        6: ["https://lh5.googleusercontent.com/p/img-1", None, [1200, 900]],
        8: [[None, -73.99, 40.73]],
        21: sparse({3: sparse({5: ["Latte art"], 7: ["Joe's Coffee"]})}),
    })]

    cleaned = clean_review(raw_review(images=[image]))

    assert cleaned["images"] == [{
        "id": "img-1",
        "url": "https://lh5.googleusercontent.com/p/img-1",
        "size": {"width": 1200, "height": 900},
        "location": {"friendly": "Joe's Coffee", "lat": 40.73, "long": -73.99},
        "caption": "Latte art",
    }]


def test_malformed_record_yields_nones():
    cleaned = clean_review(["only-an-id"])

    assert cleaned["review_id"] is None
    assert cleaned["author"]["name"] is None
    assert cleaned["review"]["text"] is None
    assert cleaned["response"] is None


async def test_clean_reviews_preserves_order():
    reviews = [raw_review("a"), raw_review("b"), raw_review("c")]

    cleaned = await clean_reviews(reviews)

    assert [r["review_id"] for r in cleaned] == ["a", "b", "c"]
