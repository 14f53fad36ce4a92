from random import Random

from pseudoloc.core.profiles.registry import default_registry, make_profile
from pseudoloc.core.transform.expansion import filler_count
from pseudoloc.core.transform.transform_text import (
    generate_filler,
    split_pseudo,
    substitute,
    transform,
)


LONG_TEXT = "an unusually long example string exceeding twenty characters"


def _german():
    return default_registry().profile_for("German")


def test_cat_german():
    profile = _german()
    out = transform("cat", profile, Random(1))
    assert out.startswith("cat|")
    filler = out[len("cat|") :]
    assert len(filler) == 2
    assert all(c in profile.filler_alphabet for c in filler)


def test_empty_string_is_just_the_delimiter():
    for profile in default_registry():
        assert transform("", profile, Random(0)) == "|"


def test_long_string_german():
    profile = _german()
    assert len(LONG_TEXT) == 60
    out = transform(LONG_TEXT, profile, Random(3))
    segment, filler = split_pseudo(out, len(LONG_TEXT))
    assert len(filler) == 18
    assert "o" not in segment
    assert "u" not in segment
    assert "s" not in segment
    assert segment.count("ö") == LONG_TEXT.count("o")
    assert segment.count("ü") == LONG_TEXT.count("u")
    assert segment.count("ß") == LONG_TEXT.count("s")
    # "a" has no German mapping
    assert segment.count("a") == LONG_TEXT.count("a")


def test_segment_length_and_filler_for_all_locales():
    texts = ["x" * 10, "y" * 11, "z" * 20, "w" * 21, "Hello, World!", LONG_TEXT]
    for profile in default_registry():
        rng = Random(profile.locale_id)
        for text in texts:
            out = transform(text, profile, rng)
            parts = split_pseudo(out, len(text))
            assert parts is not None
            segment, filler = parts
            assert len(segment) == len(text)
            assert len(filler) == filler_count(len(text))
            assert all(c in profile.filler_alphabet for c in filler)


def test_unmapped_characters_pass_through():
    profile = default_registry().profile_for("Russian")
    text = "The quick brown fox jumps over 13 lazy dogs! ~#@"
    out = substitute(text, profile, Random(5))
    assert len(out) == len(text)
    for src, dst in zip(text, out):
        if src in profile.substitutions:
            assert dst in profile.substitutions[src]
        else:
            assert dst == src


def test_multi_candidate_draws_cover_the_set():
    profile = default_registry().profile_for("Russian")
    out = substitute("b" * 400, profile, Random(11))
    assert set(out) == set(profile.substitutions["b"])


def test_same_seed_same_output():
    profile = default_registry().profile_for("Polish")
    a = transform("Zażółć gęślą jaźń zebra", profile, Random(42))
    b = transform("Zażółć gęślą jaźń zebra", profile, Random(42))
    assert a == b


def test_delimiter_in_source_text():
    profile = _german()
    out = transform("a|b", profile, Random(0))
    segment, filler = split_pseudo(out, 3)
    assert segment == "a|b"
    assert len(filler) == 2


def test_generate_filler_uses_only_alphabet():
    profile = make_profile("Tiny", {}, "xy")
    filler = generate_filler(50, profile, Random(9))
    assert len(filler) == 50
    assert set(filler) <= {"x", "y"}


def test_split_pseudo_rejects_misplaced_delimiter():
    assert split_pseudo("cat", 3) is None
    assert split_pseudo("ca|t", 3) is None
    assert split_pseudo("cat|", 3) == ("cat", "")
