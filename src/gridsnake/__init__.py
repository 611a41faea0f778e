"""Single-player grid snake: simulation core plus a pygame front end."""
