"""Test package for SafePipe Chat.

Structure:
    - unit/: Individual function and class tests
    - integration/: End-to-end workflow tests through the FastAPI app

PDF fixtures are generated with reportlab. Leverages pytest with
pytest-check for soft assertions.
"""
