"""
Tests for the habits app.

- test_analyzer: daily metric aggregation, scoring, overload and upsert
- test_api: activity log and analysis endpoints
"""
