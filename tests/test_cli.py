import solar_sim


def test_headless_run_reports_one_earth_orbit(capsys):
    code = solar_sim.main(["--headless", "--preset", "sun_earth.json", "--dt", "3600",
                           "--duration", "3.3e7", "--log-level", "WARNING"])
    assert code == 0
    out = capsys.readouterr().out
    assert "Earth" in out
    assert "orbits=1 " in out


def test_unknown_preset_fails_cleanly():
    assert solar_sim.main(["--headless", "--preset", "does_not_exist.json",
                           "--log-level", "ERROR"]) == 2


def test_list_presets(capsys):
    assert solar_sim.main(["--list-presets", "--log-level", "ERROR"]) == 0
    assert "sun_earth.json: Sun and Earth" in capsys.readouterr().out


def test_malformed_preset_fails_cleanly(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text('{"bodies": null}', encoding="utf-8")
    assert solar_sim.main(["--headless", "--preset", str(bad), "--log-level", "ERROR"]) == 2

    bad.write_text('{"bodies": [{"mass_kg": "heavy"}]}', encoding="utf-8")
    assert solar_sim.main(["--headless", "--preset", str(bad), "--log-level", "ERROR"]) == 2
