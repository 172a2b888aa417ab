"""Tests for the persisted alert state and dedup filter."""

import json
from datetime import date, datetime
from pathlib import Path

from surfcheck.config.schema import SpotConfig
from surfcheck.models.alert import Alert
from surfcheck.models.forecast import RatingKey
from surfcheck.storage.state_store import (
    AlertState,
    alert_key,
    commit_cycle,
    filter_unseen,
    load_state,
    prune_older_than,
    record_sent,
    save_state,
    was_recorded,
)

NOW = datetime(2026, 2, 10, 10, 0)


def _alert(spot: SpotConfig, days) -> Alert:
    return Alert(spot=spot, forecasts=list(days), generated_at=NOW)


class TestLoadSave:
    def test_missing_file_gives_empty_state(self, state_path: Path):
        state = load_state(state_path)
        assert state.alerts_sent == {}
        assert state.last_check

    def test_corrupt_json_gives_empty_state(self, state_path: Path):
        state_path.parent.mkdir(parents=True)
        state_path.write_text("{not json")
        assert load_state(state_path).alerts_sent == {}

    def test_invalid_utf8_gives_empty_state(self, state_path: Path):
        state_path.parent.mkdir(parents=True)
        state_path.write_bytes(b"\x80\x81garbage")
        assert load_state(state_path).alerts_sent == {}

    def test_invalid_utf8_inside_key_gives_empty_state(self, state_path: Path):
        state_path.parent.mkdir(parents=True)
        state_path.write_bytes(b'{"alertsSent": {"\xff\xfe": "x"}}')
        assert load_state(state_path).alerts_sent == {}

    def test_wrong_shape_gives_empty_state(self, state_path: Path):
        state_path.parent.mkdir(parents=True)
        state_path.write_text(json.dumps({"alertsSent": ["a", "b"]}))
        assert load_state(state_path).alerts_sent == {}

    def test_round_trip_uses_wire_names(self, state_path: Path):
        state = AlertState(last_check="2026-02-10T10:00:00", alerts_sent={"s:2026-02-11": "x"})
        save_state(state, state_path)
        raw = json.loads(state_path.read_text())
        assert raw == {"lastCheck": "2026-02-10T10:00:00", "alertsSent": {"s:2026-02-11": "x"}}
        assert load_state(state_path) == state

    def test_save_leaves_no_temp_file(self, state_path: Path):
        save_state(AlertState(), state_path)
        assert [p.name for p in state_path.parent.iterdir()] == ["state.json"]

    def test_save_replaces_existing(self, state_path: Path):
        save_state(AlertState(alerts_sent={"a:2026-02-10": "x"}), state_path)
        save_state(AlertState(alerts_sent={}), state_path)
        assert load_state(state_path).alerts_sent == {}


class TestRecords:
    def test_key_format(self):
        assert alert_key("abc", date(2026, 2, 11)) == "abc:2026-02-11"

    def test_record_and_check(self):
        state = AlertState()
        assert was_recorded(state, "abc", date(2026, 2, 11)) is False
        record_sent(state, "abc", date(2026, 2, 11), NOW)
        assert was_recorded(state, "abc", date(2026, 2, 11)) is True
        assert was_recorded(state, "other", date(2026, 2, 11)) is False
        assert state.alerts_sent["abc:2026-02-11"] == NOW.isoformat()

    def test_record_is_idempotent_upsert(self):
        state = AlertState()
        record_sent(state, "abc", date(2026, 2, 11), NOW)
        later = datetime(2026, 2, 10, 12, 0)
        record_sent(state, "abc", date(2026, 2, 11), later)
        assert state.alerts_sent == {"abc:2026-02-11": later.isoformat()}


class TestFilterUnseen:
    def test_keeps_unseen_days(self, spot, make_day):
        d1 = make_day(offset=1, rating=RatingKey.GOOD)
        d2 = make_day(offset=2, rating=RatingKey.GOOD)
        state = AlertState()
        record_sent(state, spot.id, d1.date, NOW)
        result = filter_unseen(_alert(spot, [d1, d2]), state)
        assert result is not None
        assert result.forecasts == [d2]
        assert result.spot == spot

    def test_none_when_all_seen(self, spot, make_day):
        d1 = make_day(offset=1)
        state = AlertState()
        record_sent(state, spot.id, d1.date, NOW)
        assert filter_unseen(_alert(spot, [d1]), state) is None

    def test_dedup_is_per_spot(self, make_day):
        d1 = make_day(offset=1)
        state = AlertState()
        record_sent(state, "other", d1.date, NOW)
        alert = _alert(SpotConfig(id="mine", name="Mine"), [d1])
        assert filter_unseen(alert, state) is not None

    def test_second_pass_after_commit_is_empty(self, spot, make_day, state_path):
        alert = _alert(spot, [make_day(offset=1), make_day(offset=2)])
        state = AlertState()
        first = filter_unseen(alert, state)
        assert first is not None
        commit_cycle(state, [first], NOW, state_path)
        assert filter_unseen(alert, state) is None
        assert filter_unseen(alert, load_state(state_path)) is None


class TestPrune:
    def test_retention_boundaries(self):
        state = AlertState(
            alerts_sent={
                "s:2026-02-02": "x",  # 8 days before
                "s:2026-02-03": "x",  # 7 days before
                "s:2026-02-04": "x",  # 6 days before
                "s:2026-02-12": "x",
            }
        )
        removed = prune_older_than(state, NOW, retention_days=7)
        assert removed == 1
        assert set(state.alerts_sent) == {"s:2026-02-03", "s:2026-02-04", "s:2026-02-12"}

    def test_uses_key_date_not_timestamp(self):
        state = AlertState(alerts_sent={"s:2026-01-01": NOW.isoformat()})
        prune_older_than(state, NOW)
        assert state.alerts_sent == {}

    def test_spot_id_with_colon(self):
        state = AlertState(alerts_sent={"a:b:2026-01-01": "x", "a:b:2026-02-10": "x"})
        prune_older_than(state, NOW)
        assert set(state.alerts_sent) == {"a:b:2026-02-10"}

    def test_malformed_key_kept(self):
        state = AlertState(alerts_sent={"nodate": "x"})
        assert prune_older_than(state, NOW) == 0


class TestCommitCycle:
    def test_records_prunes_and_persists(self, spot, make_day, state_path):
        state = AlertState(alerts_sent={"old:2026-01-01": "x"})
        day = make_day(offset=2)
        commit_cycle(state, [_alert(spot, [day])], NOW, state_path)

        assert state.last_check == NOW.isoformat()
        assert state.alerts_sent == {alert_key(spot.id, day.date): NOW.isoformat()}
        on_disk = load_state(state_path)
        assert on_disk == state

    def test_empty_cycle_updates_last_check(self, state_path):
        state = AlertState(last_check="2020-01-01T00:00:00")
        commit_cycle(state, [], NOW, state_path)
        assert load_state(state_path).last_check == NOW.isoformat()
