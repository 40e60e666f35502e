# sponsored_farm/cli/commands/__init__.py
