"""
Game modules for the Kelime Arena backend.

- words: lexicon, letter boards and word scoring
- users / preferences / notifications: collaborators around the player
- lives: the regenerating life pool that gates play
- rooms: two-player rooms (Room Manager)
- tournaments: eight-slot brackets with bot fill (Tournament Manager)

Each module keeps its Protocols in interfaces.py, pydantic models in
models.py and its errors in exceptions.py; modules only import each
other's interfaces and models.
"""
