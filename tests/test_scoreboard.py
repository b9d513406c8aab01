"""Tests for scoreboard.py - the persisted top-10 leaderboard."""

import json

from scoreboard import LeaderboardFile, ScoreEntry


class TestLeaderboardFile:
    def test_missing_file_is_empty(self, tmp_path):
        board = LeaderboardFile(tmp_path / "nope.json")
        assert board.load() == []
        assert board.is_new_record(0) is True

    def test_submit_persists_schema(self, tmp_path):
        path = tmp_path / "data" / "leaderboard.json"
        board = LeaderboardFile(path)
        entries, new_record = board.submit("Ada", 120)
        assert new_record is True
        assert entries[0].name == "Ada" and entries[0].score == 120

        stored = json.loads(path.read_text(encoding="utf-8"))
        assert stored[0]["name"] == "Ada"
        assert stored[0]["score"] == 120
        assert "T" in stored[0]["timestamp"]

    def test_sorted_descending_and_truncated(self, tmp_path):
        board = LeaderboardFile(tmp_path / "lb.json")
        for i in range(12):
            board.submit(f"p{i}", i * 10)
        entries = board.load()
        assert len(entries) == 10
        assert [e.score for e in entries] == [110, 100, 90, 80, 70, 60, 50, 40, 30, 20]

    def test_ties_keep_insertion_order(self, tmp_path):
        board = LeaderboardFile(tmp_path / "lb.json")
        board.submit("first", 50)
        board.submit("second", 50)
        assert [e.name for e in board.load()] == ["first", "second"]

    def test_new_record_against_full_table(self, tmp_path):
        board = LeaderboardFile(tmp_path / "lb.json")
        for i in range(10):
            board.submit(f"p{i}", 100 + i * 10)
        # Lowest entry is 100.
        assert board.is_new_record(100) is False
        _, new_record = board.submit("low", 40)
        assert new_record is False
        assert "low" not in [e.name for e in board.load()]
        _, new_record = board.submit("high", 150)
        assert new_record is True
        assert "high" in [e.name for e in board.load()]

    def test_corrupt_file_is_ignored(self, tmp_path):
        path = tmp_path / "lb.json"
        path.write_text("{not json", encoding="utf-8")
        assert LeaderboardFile(path).load() == []

    def test_malformed_rows_are_skipped(self, tmp_path):
        path = tmp_path / "lb.json"
        rows = [
            {"name": "ok", "score": 30, "timestamp": "2026-01-01T00:00:00"},
            {"name": "bad", "score": "lots", "timestamp": "2026-01-01T00:00:00"},
            "junk",
            {"name": "legacy", "score": 40, "date": "2025-12-31T10:00:00.000Z"},
        ]
        path.write_text(json.dumps(rows), encoding="utf-8")
        entries = LeaderboardFile(path).load()
        assert [e.name for e in entries] == ["legacy", "ok"]


def test_score_entry_from_raw_rejects_missing_name():
    assert ScoreEntry.from_raw({"score": 10, "timestamp": "x"}) is None
