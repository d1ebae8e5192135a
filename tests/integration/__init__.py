"""tests.integration package

Suites that drive a whole client (options -> HTTP request -> parsed model)
against the in-process ``MockServer`` transport from ``tests/conftest.py``.
Run only these with `pytest -m integration`.
"""
