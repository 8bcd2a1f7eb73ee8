import pandas as pd
import pytest

from zoopdata.config import MONTHS
from zoopdata.derive import add_calendar_fields, as_season, recode_stations, station_ranks
from zoopdata.errors import ParseError


def test_station_codes_rank_in_order():
    df = pd.DataFrame({"station": ["S2", "S4", "S5", "S8"]})
    out = recode_stations(df)
    assert list(out["Station"]) == [1, 2, 3, 4]


def test_station_ranks_dense_and_order_preserving():
    codes = ["S8", "S2", "S5", "S2", "S4", "S8", "S5"]
    ranks = station_ranks(codes)
    assert sorted(ranks.values()) == list(range(1, len(set(codes)) + 1))
    ordered = sorted(ranks)
    for a, b in zip(ordered, ordered[1:]):
        assert ranks[a] < ranks[b]


def test_numeric_codes_sort_by_value():
    assert station_ranks([10, 2, 3]) == {2: 1, 3: 2, 10: 3}
    assert station_ranks(["10", "2", "3"]) == {"2": 1, "3": 2, "10": 3}


def test_ranks_follow_the_rows_present():
    # dropping S4 shifts S5 and S8 down
    assert station_ranks(["S2", "S5", "S8"]) == {"S2": 1, "S5": 2, "S8": 3}


def test_empty_table_recodes_to_empty():
    df = pd.DataFrame({"station": pd.Series([], dtype="string")})
    out = recode_stations(df)
    assert out.empty
    assert "Station" in out.columns
    assert station_ranks([]) == {}


def test_calendar_fields_for_known_date():
    df = pd.DataFrame({"date": pd.to_datetime(["2014-03-12"])})
    out = add_calendar_fields(df)
    assert out.loc[0, "Year"] == 2014
    assert out.loc[0, "Month"] == "Mar"
    assert out.loc[0, "DOY"] == 71
    assert out.loc[0, "Yearf"] == "2014"
    assert list(out["Month"].cat.categories) == MONTHS
    assert out["Month"].cat.ordered


@pytest.mark.parametrize(
    "day, doy",
    [("2015-01-01", 1), ("2015-12-31", 365), ("2016-02-29", 60), ("2016-12-31", 366)],
)
def test_calendar_round_trip(day, doy):
    out = add_calendar_fields(pd.DataFrame({"date": pd.to_datetime([day])}))
    year, month, d = int(out.loc[0, "Year"]), out.loc[0, "Month"], int(out.loc[0, "DOY"])
    assert d == doy
    rebuilt = pd.Timestamp(year=year, month=1, day=1) + pd.Timedelta(days=d - 1)
    assert rebuilt == pd.Timestamp(day)
    assert MONTHS[rebuilt.month - 1] == month


def test_season_is_ordered_not_alphabetical():
    s = as_season(pd.Series(["Fall", "Spring", "Summer", None]))
    assert list(s.cat.categories) == ["Spring", "Summer", "Fall"]
    assert s.cat.ordered
    assert list(s.dropna().sort_values()) == ["Spring", "Summer", "Fall"]
    assert (s.iloc[:3] > "Spring").tolist() == [True, False, True]
    assert pd.isna(s[3])


def test_unknown_season_is_a_parse_error():
    with pytest.raises(ParseError):
        as_season(pd.Series(["Spring", "Winter"]))


def test_null_dates_are_rejected():
    df = pd.DataFrame({"date": pd.to_datetime(["2014-03-12", None])})
    with pytest.raises(ParseError):
        add_calendar_fields(df)


def test_missing_station_code_is_a_parse_error():
    df = pd.DataFrame({"station": pd.array(["S2", None, "S4"], dtype="string")})
    with pytest.raises(ParseError, match="rows \\[1\\]"):
        recode_stations(df)
