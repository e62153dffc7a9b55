"""Tests for the Minecraft Server Status integration."""
