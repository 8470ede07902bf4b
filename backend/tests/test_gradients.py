from services.theme import GRADIENT_PALETTES, generate_gradient_config, generate_theme_tokens, hash_string, seeded_random


def test_hash_string_matches_browser_values():
    assert hash_string("") == 0
    assert hash_string("a") == 97
    assert hash_string("ab") == 97 * 31 + 98
    # Astral characters hash as two UTF-16 code units
    assert hash_string("\U0001F600") == 0xD83D * 31 + 0xDE00


def test_hash_string_wraps_to_32_bits():
    value = hash_string("a fairly long project identifier " * 20)
    assert 0 <= value <= 2**31


def test_seeded_random_sequence():
    random = seeded_random(49)
    assert random() == 38486 / 233280
    assert random() == ((38486 * 9301 + 49297) % 233280) / 233280


def test_same_seed_same_gradient():
    assert generate_gradient_config("42") == generate_gradient_config("42")
    assert generate_gradient_config("42", is_mobile=True) == generate_gradient_config("42", is_mobile=True)


def test_palette_selection_for_known_seed():
    assert generate_gradient_config("1").palette.name == "cool-professional"


def test_blob_bounds():
    for seed in ("1", "17", "project-abc", "999999"):
        config = generate_gradient_config(seed)
        assert len(config.blobs) == 4
        assert config.palette in GRADIENT_PALETTES
        for index, blob in enumerate(config.blobs):
            assert 20 <= blob.x <= 80
            assert 20 <= blob.y <= 80
            assert 20 <= blob.size <= 28
            assert blob.color == config.palette.colors[index % len(config.palette.colors)]


def test_mobile_uses_three_blobs():
    assert len(generate_gradient_config("7", is_mobile=True).blobs) == 3


def test_theme_tokens():
    palette = GRADIENT_PALETTES[2]
    tokens = generate_theme_tokens(palette)
    assert tokens.accent == "#06b6d4"
    assert tokens.model_dump(by_alias=True) == {
        "accent": "#06b6d4",
        "surface": "rgba(255, 255, 255, 0.9)",
        "border": "rgba(0, 0, 0, 0.1)",
        "textPrimary": "#1f2937",
        "textSecondary": "#6b7280",
    }
