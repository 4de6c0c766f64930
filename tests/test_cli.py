"""Tests for the command-line interface."""

import json

import pytest
from greeksengine import compute_greeks
from greeksengine.cli import main


def _run(capsys, *argv):
    main(list(argv))
    return json.loads(capsys.readouterr().out)


class TestGreeksCommand:
    def test_outputs_wire_dict(self, capsys):
        out = _run(capsys, "greeks", "--spot", "25142", "--strike", "25100",
                   "--days", "7", "--vol", "15", "--rate", "6.5")
        assert out == compute_greeks(25142, 25100, 7, 15, 6.5).to_dict()

    def test_invalid_exits_2(self, capsys):
        with pytest.raises(SystemExit) as ei:
            main(["greeks", "--spot", "25142", "--strike", "25100",
                  "--days", "0", "--vol", "15"])
        assert ei.value.code == 2
        assert "days_to_expiry" in capsys.readouterr().err


class TestOtherCommands:
    def test_iv(self, capsys):
        px = compute_greeks(25142, 25100, 7, 15, 6.5).call_price
        out = _run(capsys, "iv", "--spot", "25142", "--strike", "25100",
                   "--days", "7", "--premium", str(px), "--kind", "ce")
        assert out["impliedVolatility"] == pytest.approx(15.0, abs=0.05)

    def test_chain(self, capsys):
        out = _run(capsys, "chain", "--spot", "25142", "--days", "7",
                   "--strikes", "25000,0,25200", "--vol", "15")
        assert [row["strike"] for row in out] == [25000.0, 0.0, 25200.0]
        assert "error" in out[1]
        assert out[0]["callPrice"] > out[2]["callPrice"]

    def test_chain_empty_vol_exits_2(self, capsys):
        with pytest.raises(SystemExit) as ei:
            main(["chain", "--spot", "25142", "--days", "7",
                  "--strikes", "25000,25100", "--vol", ""])
        assert ei.value.code == 2
        assert "at least one number" in capsys.readouterr().err

    def test_maxpain(self, capsys):
        out = _run(capsys, "maxpain", "--strikes", "100,110,120",
                   "--call-oi", "10,20,30", "--put-oi", "30,20,10")
        assert out["maxPain"] == 110.0
        assert out["pcr"] == 1.0
        assert out["pain"] == [400.0, 200.0, 400.0]

    def test_maxpain_estimate(self, capsys):
        out = _run(capsys, "maxpain", "--strikes", "25000,25100",
                   "--call-oi", "30000000,22800000", "--put-oi", "25000000,20200000",
                   "--spot", "25142.3")
        assert out["maxPain"] == 25135

    def test_change(self, capsys):
        out = _run(capsys, "change", "--price", "25142", "--previous-close", "25000")
        assert out == {"change": 142.0, "changePct": 0.57}

    def test_change_bad_close(self, capsys):
        with pytest.raises(SystemExit) as ei:
            main(["change", "--price", "25142", "--previous-close", "0"])
        assert ei.value.code == 2
