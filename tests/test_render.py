from country_explorer.records import CountryRecord
from country_explorer.render import CARD_COLUMNS, NA, card_fields, format_area, records_to_frame


def test_absent_fields_render_placeholder():
    fields = card_fields(CountryRecord(name="Palau"))
    assert list(fields) == CARD_COLUMNS
    assert set(fields.values()) == {NA}


def test_full_card():
    record = CountryRecord(
        name="France",
        capital="Paris",
        region="Europe",
        subregion="Western Europe",
        population=67391582,
        area=640679.0,
        coordinates=(46.0, 2.0),
        borders=("BEL", "DEU"),
        timezones=("UTC+01:00",),
        currency="Euro (EUR)",
        languages=("French",),
    )
    fields = card_fields(record)
    assert fields["Population"] == "67,391,582"
    assert fields["Area"] == "640,679 km²"
    assert fields["Coordinates"] == "Lat: 46, Lng: 2"
    assert fields["Borders"] == "BEL, DEU"
    assert fields["Currency"] == "Euro (EUR)"


def test_fractional_area():
    assert format_area(1234.5) == "1,234.5 km²"


def test_zero_population_is_shown():
    assert card_fields(CountryRecord(name="Bouvet Island", population=0))["Population"] == "0"


def test_frame():
    frame = records_to_frame([CountryRecord(name="A"), CountryRecord(name="B", capital="b")])
    assert list(frame.columns) == ["Name", *CARD_COLUMNS]
    assert frame["Name"].tolist() == ["A", "B"]
    assert frame["Capital"].tolist() == [NA, "b"]
    assert not frame.isna().any().any()


def test_empty_frame_keeps_columns():
    frame = records_to_frame([])
    assert frame.empty
    assert list(frame.columns) == ["Name", *CARD_COLUMNS]
