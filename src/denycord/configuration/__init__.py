"""
Configuration management for Denycord.

- **app_configuration.py**: YAML configuration loader for the denylist path, watcher
  retry interval and exemption rules. Falls back to defaults on missing or malformed
  config files.
"""
