from __future__ import annotations

from types import SimpleNamespace


def _target():
    from reveal_sniper.config import Target

    return Target(id=6, name="Abel")


def test_null_err_is_success_with_explorer_link():
    from reveal_sniper.execution.confirmation import interpret_confirmation

    out = interpret_confirmation(_target(), "Mint1", "Sig1", {"value": {"err": None}})
    assert out.success is True
    assert out.signature == "Sig1"
    assert out.error_detail is None
    assert out.explorer_url == "https://solscan.io/tx/Sig1"


def test_err_is_failure_without_raising():
    from reveal_sniper.execution.confirmation import interpret_confirmation

    err = {"InstructionError": [2, {"Custom": 6001}]}
    out = interpret_confirmation(_target(), "Mint1", "Sig1", {"value": {"err": err}})
    assert out.success is False
    assert out.signature == "Sig1"
    assert "6001" in out.error_detail


def test_solana_style_status_list():
    from reveal_sniper.execution.confirmation import interpret_confirmation

    ok = SimpleNamespace(value=[SimpleNamespace(err=None, confirmation_status="confirmed")])
    assert interpret_confirmation(_target(), "Mint1", "Sig1", ok).success is True

    missing = SimpleNamespace(value=[None])
    out = interpret_confirmation(_target(), "Mint1", "Sig1", missing)
    assert out.success is False
    assert out.error_detail


def test_unreadable_result_does_not_raise():
    from reveal_sniper.execution.confirmation import interpret_confirmation

    class Exploding:
        @property
        def value(self):
            raise RuntimeError("boom")

    out = interpret_confirmation(_target(), "Mint1", "Sig1", Exploding())
    assert out.success is False
    assert "boom" in out.error_detail


def test_explorer_template_with_extra_braces_does_not_raise():
    from reveal_sniper.execution.confirmation import interpret_confirmation

    out = interpret_confirmation(
        _target(),
        "Mint1",
        "Sig1",
        {"value": {"err": None}},
        explorer_tx_url="https://explorer.test/tx/{signature}?cluster={cluster}&x={}",
    )
    assert out.success is True
    assert out.explorer_url == "https://explorer.test/tx/Sig1?cluster={cluster}&x={}"
