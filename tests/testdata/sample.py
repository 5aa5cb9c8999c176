"""Module docstring on one line."""

import os

# A line comment
def main():
    """
    Multi-line docstring.
    """
    return os.getcwd()
