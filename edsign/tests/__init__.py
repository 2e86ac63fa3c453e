"""Tests for edsign."""
