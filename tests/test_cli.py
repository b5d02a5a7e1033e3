import json

import pytest

from courtplanner.cli import main


def _run(tmp_path, *args):
    return main(["--store", str(tmp_path / "store.json"), "--seed", "3", *args])


def test_plan_all_and_show(tmp_path, capsys):
    assert _run(tmp_path, "--as", "Mattias", "plan-all") == 0
    assert "Planned 120 matches" in capsys.readouterr().out

    assert _run(tmp_path, "show", "2025-09-28") == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 6
    assert lines[0].startswith("2025-09-28 18u30-19u30 court 1 (double, training)")


def test_non_admin_cannot_plan(tmp_path, capsys):
    assert _run(tmp_path, "--as", "Ruben", "plan-week", "2025-10-05") == 1
    assert "Only the admin" in capsys.readouterr().err


def test_reserve_winner_and_ladder(tmp_path, capsys):
    assert (
        _run(
            tmp_path,
            "--as", "Ruben",
            "reserve", "2025-10-05", "19u30-20u30", "3", "Ruben", "Tibo",
            "--category", "wedstrijd",
        )
        == 0
    )
    assert _run(tmp_path, "--as", "Tibo", "winner", "2025-10-05", "19u30-20u30", "3", "Tibo") == 0
    capsys.readouterr()

    assert _run(tmp_path, "ladder") == 0
    out = capsys.readouterr().out.splitlines()
    assert out[2].split()[:5] == ["1", "Tibo", "1", "1", "0"]


def test_club_file(tmp_path, capsys):
    club = tmp_path / "club.json"
    club.write_text(
        json.dumps(
            {
                "season": {"name": "Mini", "start_date": "2026-01-04", "num_weeks": 1,
                           "admin": "Ann"},
                "roster": {"Ann": 10, "Ben": 12, "Cas": 40, "Dirk": 44},
            }
        ),
        encoding="utf-8",
    )

    assert _run(tmp_path, "--club", str(club), "--as", "Ann", "plan-all") == 0
    assert "Planned 2 matches for 'Mini'" in capsys.readouterr().out


def test_bad_date_is_rejected(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        _run(tmp_path, "show", "yesterday")

    assert exc_info.value.code == 2


def test_availability_needs_acting_player(tmp_path, capsys):
    assert _run(tmp_path, "availability", "Ruben", "2025-10-05", "18u30-19u30") == 1
    assert "Log in" in capsys.readouterr().err

    assert (
        _run(tmp_path, "--as", "Ruben", "availability", "Ruben", "2025-10-05", "18u30-19u30")
        == 0
    )
    assert "Ruben is now unavailable" in capsys.readouterr().out


def test_doubles_winner_and_ladder(tmp_path, capsys):
    assert (
        _run(
            tmp_path,
            "--as", "Ruben",
            "reserve", "2025-10-05", "18u30-19u30", "2", "Ruben", "Tibo", "Seppe", "Aaron",
            "--category", "wedstrijd",
        )
        == 0
    )
    assert (
        _run(
            tmp_path,
            "--as", "Seppe",
            "winner", "2025-10-05", "18u30-19u30", "2", "Aaron", "Seppe",
        )
        == 0
    )
    assert "[winner: Seppe & Aaron]" in capsys.readouterr().out

    assert _run(tmp_path, "ladder", "--doubles") == 0
    out = capsys.readouterr().out.splitlines()
    assert [line.split()[1] for line in out[2:4]] == ["Aaron", "Seppe"]
    assert out[2].split()[2:5] == ["1", "1", "0"]
