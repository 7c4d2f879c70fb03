"""
Test suite for ppmi_matrix.

Run tests from project root:
    python -m pytest tests/

Or run individual tests:
    python -m pytest tests/test_pmi.py -v
"""
