import pytest

from promotheans_api.core.errors import ValidationError
from promotheans_api.repositories.community_arts import _normalize, clean_artist_name


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Jane Doe ART", "Jane Doe"),
        ("Jane Doe art  ", "Jane Doe"),
        ("  Jane Doe  Art", "Jane Doe"),
        ("Bart", "Bart"),
        ("ARTemis", "ARTemis"),
        ("Art Garfunkel", "Art Garfunkel"),
        (None, None),
    ],
)
def test_clean_artist_name(name, expected):
    assert clean_artist_name(name) == expected


def test_normalize_requires_image_category_artist():
    with pytest.raises(ValidationError) as exc:
        _normalize({"image": "assets/community_art/a.png", "category": "Fan Art"})
    assert exc.value.message == "Missing required fields: image, category, artist"


def test_normalize_fills_optional_fields():
    values = _normalize({"image": "a.png", "category": "Fan Art", "artist": "Jane ART", "xHandle": ""})
    assert values["artist"] == "Jane"
    assert values["title"] == ""
    assert values["xHandle"] is None
    assert values["description"] is None
