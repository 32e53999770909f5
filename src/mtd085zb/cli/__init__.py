"""Command-line interface for the MTD085-ZB presence sensor tools."""
