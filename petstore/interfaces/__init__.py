"""Inbound adapters exposing the pet service."""
