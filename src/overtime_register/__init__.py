"""Overtime Register package.

This package is organized by feature modules (auth, employees, overtime,
reports, settings) with a thin Flask controller layer on top of
service/repository layers.
"""
