"""Standalone NiceGUI app for the activity comparison chart."""
