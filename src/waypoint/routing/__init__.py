"""Routing — ordered route and filter tables with first-match lookup.

Routes are registered during setup; lookups scan the tables in
registration order.
"""
