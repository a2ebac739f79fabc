"""Acoustic zone simulation engine for 3D room survey visualization."""
