"""
End-to-end tests for the valuemerger CLI.

All tests in this directory are marked with @pytest.mark.e2e and run
complete CLI commands through the Click test runner.
"""
