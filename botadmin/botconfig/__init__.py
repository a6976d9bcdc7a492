"""Merchant bot configuration: field model, update/reset engines, validation.

Domain layer for the configuration documents served by the admin API.
"""
