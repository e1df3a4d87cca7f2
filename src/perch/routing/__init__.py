"""Routing — ordered MVC route table with inbound matching and URL generation.

Rules are registered per table (typically per test) and tried in order;
the first match wins.
"""
