"""API tests against a temporary SQLite database, plus opt-in live provider checks.

Tests that call real external services are marked with @pytest.mark.integration
and are deselected by default.

Run live provider tests:
    pytest tests/integration/ -v -s -m integration
"""
