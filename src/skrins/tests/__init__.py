"""Tests for Skrins"""
