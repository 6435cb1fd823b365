"""Directive dispatch, validation and the configuration builder."""
