"""Barbershop POS package.

Organized by feature modules (users, shifts, attendance, transactions, stats, ...)
with a thin Flask controller layer over service/repository layers.
"""
