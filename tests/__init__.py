"""
config-notices test suite

Tests are organized by layer:
- test_notice_models.py, test_configuration_checks.py, test_configuration_auditor.py: audit core
- test_request_gate.py, test_config_notices_middleware.py: Flask request pipeline
- test_thumbs_probe.py, test_settings_and_version.py: collaborators
- test_management_commands.py: CLI
"""
