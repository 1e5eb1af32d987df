"""Routing — template matching and an ordered route table.

Routes are registered during setup; the table is read-only once the mux
is finalized.
"""
