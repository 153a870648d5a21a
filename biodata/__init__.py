"""Biodata Image Service.

Fills the biodata presentation template and renders it to PNG.
"""
