"""
Tests for the command-line entry points.
"""

import argparse
import json

import pytest

from factorymatch.app import cmd_dedup, cmd_init_db, cmd_list, cmd_merge, cmd_rank, cmd_seed, cmd_validate
from factorymatch.env import Settings
from storage.repositories.factories import FactoryRepository


def make_args(db_path, **kwargs) -> argparse.Namespace:
    return argparse.Namespace(db=str(db_path), settings=Settings(), **kwargs)


def write_json(path, data):
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return str(path)


@pytest.fixture
def seeded_db(tmp_path, metal_factory_row):
    db_path = tmp_path / "roster.db"
    rows = [
        {k: v for k, v in metal_factory_row.items() if k not in ("id", "created_at")},
        {"name": "Delta Copy", "email": "info@delta.com", "approved": True},
        {"name": "Delta Original", "email": "info@delta.com", "approved": True},
        {"industry": ["metal"]},
    ]
    cmd_seed(make_args(db_path, input=write_json(tmp_path / "factories.json", rows)))
    return db_path


class TestSeedAndList:
    def test_init_db(self, tmp_path, capsys):
        db_path = tmp_path / "new.db"
        cmd_init_db(make_args(db_path))

        assert db_path.exists()
        assert "Database ready" in capsys.readouterr().out

    def test_seed_skips_invalid_rows(self, capsys, seeded_db):
        out = capsys.readouterr().out
        assert "[skip] row 3" in out
        assert "inserted=3 skipped=1" in out

    def test_list(self, seeded_db, capsys):
        capsys.readouterr()
        cmd_list(make_args(seeded_db, approved=True))
        assert "Found 3 factories" in capsys.readouterr().out

    def test_list_missing_db(self, tmp_path, capsys):
        cmd_list(make_args(tmp_path / "missing.db", approved=False))
        assert "Database not found" in capsys.readouterr().out


class TestRankCommand:
    def test_invalid_input_exits(self, tmp_path):
        path = write_json(tmp_path / "bad.json", {"name": "widget"})
        with pytest.raises(SystemExit):
            cmd_validate(make_args(tmp_path / "x.db", input=path, strict=False))

    def test_strict_rejects_unknown_type(self, tmp_path, capsys):
        data = {"name": "widget", "description": "a widget", "type": "crowdfunding"}
        path = write_json(tmp_path / "invention.json", data)

        cmd_validate(make_args(tmp_path / "x.db", input=path, strict=False))
        assert "Valid" in capsys.readouterr().out

        with pytest.raises(SystemExit):
            cmd_validate(make_args(tmp_path / "x.db", input=path, strict=True))
        assert "Unknown production type" in capsys.readouterr().out

    def test_rank_and_save(self, seeded_db, tmp_path, aluminum_invention, capsys):
        path = write_json(tmp_path / "invention.json", aluminum_invention)
        capsys.readouterr()

        cmd_rank(make_args(seeded_db, input=path, save=True))

        out = capsys.readouterr().out
        assert "1. [80] مصنع الدلتا" in out
        assert "Saved invention 1" in out
        assert len(FactoryRepository(seeded_db).fetch_invention_results()) == 1


class TestDedupAndMerge:
    def test_dedup_reports_group(self, seeded_db, capsys):
        capsys.readouterr()
        cmd_dedup(make_args(seeded_db))

        out = capsys.readouterr().out
        assert "Found 1 duplicate groups" in out
        assert "identical email" in out
        assert "scanned 3/3" in out

    def test_merge(self, seeded_db, capsys):
        cmd_merge(make_args(seeded_db, primary=3, suspects="2"))

        assert "removed 1 records" in capsys.readouterr().out
        assert FactoryRepository(seeded_db).count_factories() == 2

    def test_merge_rejects_primary_as_suspect(self, seeded_db):
        with pytest.raises(SystemExit):
            cmd_merge(make_args(seeded_db, primary=2, suspects="2,3"))
