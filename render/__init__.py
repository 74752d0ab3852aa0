"""Panda3D geometry builders."""
