from datetime import date, timedelta
from pathlib import Path

import pytest

from songart.domain.errors import LayerResolutionError, MissingAssetError
from songart.domain.models import Tag
from songart.services.assets import FileSystemAssets, InMemoryAssets
from songart.services.layer_resolver import build_layer_names, build_layer_spec, weekday_variant


def test_poetic_example_from_the_catalog(entry_factory):
    entry = entry_factory(
        topic=Tag(name="Poetic"),
        secondary_instrument=Tag(name="uke"),
        mood=Tag(name="Happy"),
        beard=None,
    )
    names = build_layer_names(entry, InMemoryAssets({"topic_poetic-uke.png"}))
    assert names == [
        "location_kitchen.png",
        "topic_poetic2.png",  # 2015-05-04 is a Monday
        "instrument_guitar.png",
        "mood_happy.png",
        "beard_na.png",
    ]


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2015, 5, 3), 1),  # Sunday
        (date(2015, 5, 4), 2),  # Monday
        (date(2015, 5, 9), 7),  # Saturday
    ],
)
def test_weekday_variant(day, expected):
    assert weekday_variant(day) == expected


def test_topic_name_is_compacted(entry_factory):
    entry = entry_factory(topic=Tag(name="Road Trip"))
    assert build_layer_names(entry, InMemoryAssets())[1] == "topic_roadtrip.png"


@pytest.mark.parametrize("secondary", ["uke", "baritone uke"])
def test_ukulele_topic_variant_when_asset_exists(entry_factory, secondary):
    entry = entry_factory(secondary_instrument=Tag(name=secondary))
    with_variant = InMemoryAssets({"topic_love-uke.png"})
    without_variant = InMemoryAssets()
    assert build_layer_names(entry, with_variant)[1] == "topic_love-uke.png"
    assert build_layer_names(entry, without_variant)[1] == "topic_love.png"


def test_ukulele_variant_ignored_for_other_instruments(entry_factory):
    entry = entry_factory(secondary_instrument=Tag(name="banjo"))
    assert build_layer_names(entry, InMemoryAssets({"topic_love-uke.png"}))[1] == "topic_love.png"


def test_synths_adds_vocals_without_hands_on_top(entry_factory):
    entry = entry_factory(main_instrument=Tag(name="vocals"), secondary_instrument=Tag(name="Synths"))
    names = build_layer_names(entry, InMemoryAssets())
    assert names[2:4] == ["instrument_synths.png", "instrument_vocals_no_hands.png"]


def test_synths_applies_whatever_the_main_instrument(entry_factory):
    entry = entry_factory(main_instrument=Tag(name="piano"), secondary_instrument=Tag(name="synths"))
    names = build_layer_names(entry, InMemoryAssets())
    assert names[2:4] == ["instrument_synths.png", "instrument_vocals_no_hands.png"]


def test_vocals_with_secondary_draws_vocals_first(entry_factory):
    entry = entry_factory(main_instrument=Tag(name="Vocals"), secondary_instrument=Tag(name="Acoustic Guitar"))
    names = build_layer_names(entry, InMemoryAssets())
    assert names[2:4] == ["instrument_vocals_no_hands.png", "instrument_acousticguitar.png"]


@pytest.mark.parametrize(
    "main, secondary",
    [("vocals", None), ("Electric Guitar", None), ("piano", Tag(name="uke"))],
)
def test_single_main_instrument_layer(entry_factory, main, secondary):
    entry = entry_factory(main_instrument=Tag(name=main), secondary_instrument=secondary)
    names = build_layer_names(entry, InMemoryAssets())
    assert len(names) == 5
    assert names[2] == f"instrument_{main.lower().replace(' ', '')}.png"


@pytest.mark.parametrize("main", ["vocals", "guitar"])
def test_empty_secondary_instrument_counts_as_none(entry_factory, main):
    entry = entry_factory(main_instrument=Tag(name=main), secondary_instrument=Tag(name=""))
    names = build_layer_names(entry, InMemoryAssets({"topic_love-uke.png"}))
    assert names[1] == "topic_love.png"
    assert names[2:] == [f"instrument_{main}.png", "mood_happy.png", "beard_na.png"]
    assert "instrument_.png" not in names


def test_mood_is_lower_cased(entry_factory):
    entry = entry_factory(mood=Tag(name="Bitter Sweet"))
    assert build_layer_names(entry, InMemoryAssets())[-2] == "mood_bitter sweet.png"


@pytest.mark.parametrize(
    "beard, expected",
    [
        (None, "beard_na.png"),
        (Tag(name=""), "beard_na.png"),
        (Tag(name="Goatee"), "beard_goatee.png"),
        (Tag(name="Mustache/Goatee"), "beard_mustachegoatee.png"),
    ],
)
def test_beard_layer(entry_factory, beard, expected):
    entry = entry_factory(beard=beard)
    assert build_layer_names(entry, InMemoryAssets())[-1] == expected


@pytest.mark.parametrize("attribute", ["location", "topic", "mood", "main_instrument"])
def test_missing_required_attribute(entry_factory, attribute):
    entry = entry_factory(**{attribute: None})
    with pytest.raises(LayerResolutionError) as exc:
        build_layer_names(entry, InMemoryAssets())
    assert exc.value.attribute == attribute


def test_location_without_image_is_an_error(entry_factory):
    entry = entry_factory(location=Tag(name="Kitchen"))
    with pytest.raises(LayerResolutionError):
        build_layer_names(entry, InMemoryAssets())


def test_ordering_invariants_hold_across_attribute_combinations(entry_factory):
    assets = InMemoryAssets({"topic_love-uke.png"})
    mains = ["vocals", "guitar"]
    secondaries = [None, Tag(name="synths"), Tag(name="uke"), Tag(name="bass")]
    topics = ["Poetic", "Love"]
    beards = [None, Tag(name="Full")]
    for offset in range(7):
        for main in mains:
            for secondary in secondaries:
                for topic in topics:
                    for beard in beards:
                        entry = entry_factory(
                            date=date(2015, 5, 4) + timedelta(days=offset),
                            main_instrument=Tag(name=main),
                            secondary_instrument=secondary,
                            topic=Tag(name=topic),
                            beard=beard,
                        )
                        names = build_layer_names(entry, assets)
                        assert names[0] == "location_kitchen.png"
                        assert names[1].startswith("topic_")
                        assert names[-2].startswith("mood_")
                        assert names[-1].startswith("beard_")
                        instruments = names[2:-2]
                        assert len(instruments) in (1, 2)
                        assert all(n.startswith("instrument_") for n in instruments)
                        assert build_layer_names(entry, assets) == names


def test_layer_spec_holds_full_paths(entry_factory, tmp_path):
    spec = build_layer_spec(entry_factory(), FileSystemAssets(tmp_path))
    assert spec[0] == tmp_path / "location_kitchen.png"
    assert len(spec) == 5
    assert spec.names[-1] == "beard_na.png"
    assert build_layer_spec(entry_factory(), FileSystemAssets(tmp_path)) == spec


def test_uke_variant_checked_on_disk(entry_factory, tmp_path):
    entry = entry_factory(secondary_instrument=Tag(name="uke"))
    assets = FileSystemAssets(tmp_path)
    assert build_layer_spec(entry, assets).names[1] == "topic_love.png"
    (tmp_path / "topic_love-uke.png").write_bytes(b"png")
    assert build_layer_spec(entry, assets).names[1] == "topic_love-uke.png"


def test_strict_mode_fails_fast_on_missing_asset(entry_factory):
    names = {
        "location_kitchen.png",
        "topic_love.png",
        "instrument_guitar.png",
        "mood_happy.png",
    }
    assets = InMemoryAssets(names, root="/layers")
    # lazy by default
    assert len(build_layer_spec(entry_factory(), assets)) == 5
    with pytest.raises(MissingAssetError) as exc:
        build_layer_spec(entry_factory(), assets, strict=True)
    assert exc.value.path == Path("/layers/beard_na.png")
    assets.names.add("beard_na.png")
    assert len(build_layer_spec(entry_factory(), assets, strict=True)) == 5
