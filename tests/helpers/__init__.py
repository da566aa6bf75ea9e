# tests/helpers/__init__.py
