"""Routing — ordered route table with first-match-wins dispatch.

Route patterns are compiled once when a route is registered.
"""
