"""
Adapters connecting the competition store to the outside world.
"""
