"""
Smoke tests to verify basic imports and functionality.
"""


def test_import_finledgerlab():
    """Test that we can import the main package."""
    import finledgerlab

    assert hasattr(finledgerlab, "__version__")
    assert finledgerlab.__version__ == "0.1.0"


def test_public_api_is_exported():
    """Test that everything in __all__ is importable from the package root."""
    import finledgerlab

    for name in finledgerlab.__all__:
        assert hasattr(finledgerlab, name), name


def test_import_core_components():
    """Test that core components can be imported."""
    from finledgerlab.core import (
        Account,
        Budget,
        Debt,
        Ledger,
        PredictionRangeError,
        RowArena,
        predict,
        update,
    )

    assert Account is not None
    assert Budget is not None
    assert Debt is not None
    assert Ledger is not None
    assert PredictionRangeError is not None
    assert RowArena is not None
    assert callable(predict)
    assert callable(update)


def test_strategies_registered_on_import():
    """Test that importing the package registers every debt strategy."""
    from finledgerlab import DebtRegistry, K

    for kind in K.debt_kinds():
        assert kind in DebtRegistry


def test_kinds_are_unique():
    """Test that kind strings do not collide."""
    from finledgerlab.core.kinds import K

    kinds = K.all_kinds()
    assert len(kinds) == len(set(kinds))
    assert set(K.debt_kinds()) <= set(kinds)
