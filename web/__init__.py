"""JSON API for India Trend Tracker."""
