"""Shared utilities.
"""
