"""
Client-side state for the creations app.

Holds what the single-page frontend keeps in memory: the creation store,
the optimistic like synchronizer, the community feed loader and the
dashboard's pagination and accordion state.
"""
