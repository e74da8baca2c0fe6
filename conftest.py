"""
Root conftest.

Its presence makes pytest put the repository root on `sys.path`, so test
modules import the package as `src.ndlayout...`.
"""
