"""Wellness check-in compliance package.

This package is organized by feature modules (dates, exemptions, checkins,
attendance, compliance, grading, reports, summaries) around one pure engine,
with a thin Flask controller layer and service/repository layers on top.
"""
