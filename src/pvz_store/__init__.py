"""Pickup point goods-receiving backend."""
