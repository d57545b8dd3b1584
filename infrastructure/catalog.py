"""
Sample catalog - starter rewards and tournaments.

Loaded into Supabase by scripts/seed_catalog.py and into the memory store
when SEED_MEMORY_CATALOG is set.
"""

SAMPLE_REWARDS = [
    {"title": "Gaming Mouse", "description": "High-precision gaming mouse", "points_required": 500, "category": "hardware", "stock": 10},
    {"title": "Mechanical Keyboard", "description": "RGB mechanical gaming keyboard", "points_required": 800, "category": "hardware", "stock": 5},
    {"title": "Game Key - Steam", "description": "Random Steam game key", "points_required": 200, "category": "games", "stock": 50},
    {"title": "Riyadah Elite T-Shirt", "description": "Official merchandise t-shirt", "points_required": 300, "category": "merchandise", "stock": 20},
    {"title": "Gaming Headset", "description": "Professional gaming headset", "points_required": 600, "category": "hardware", "stock": 8},
]

SAMPLE_TOURNAMENTS = [
    {"title": "Apex Legends Championship", "game_name": "Apex Legends", "description": "Competitive tournament for Apex Legends players",
     "start_date": "2026-02-15T18:00:00+00:00", "end_date": "2026-02-15T22:00:00+00:00", "prize_pool": "$10,000", "max_participants": 128},
    {"title": "Fortnite Weekend Battle", "game_name": "Fortnite", "description": "Weekend tournament for Fortnite enthusiasts",
     "start_date": "2026-02-20T16:00:00+00:00", "end_date": "2026-02-20T20:00:00+00:00", "prize_pool": "$5,000", "max_participants": 256},
    {"title": "Valorant Pro Series", "game_name": "Valorant", "description": "Professional Valorant tournament series",
     "start_date": "2026-03-05T19:00:00+00:00", "end_date": "2026-03-05T23:00:00+00:00", "prize_pool": "$7,500", "max_participants": 32},
]
