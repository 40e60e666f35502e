# sponsored_farm/cli/__init__.py
