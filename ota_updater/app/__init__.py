"""Application composition layer for the Tkinter GUI.

Wires views, view models, adapters and the query session into the runnable
desktop app without placing query logic in views.
"""
