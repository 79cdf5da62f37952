# kept in sync with the version in setup.py
version = "0.1.0"
