"""
Gameplay constants for the roar arena.

Distances are in pixels, rates are per frame (one simulation step).
"""

# Viewport
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600

# Player
PLAYER_RADIUS = 40
PLAYER_MAX_HEALTH = 100
DAMAGE_PER_HIT = 15
MAX_ROAR = 100
ROAR_CHARGE_PER_KILL = 10
ROAR_RADIUS = 400

# Enemies
ENEMY_RADIUS = 20
KILL_SCORE = 10
HIT_TOLERANCE = 1.0       # hitboxes "touch" when the gap is below this
TAP_MARGIN = 20           # tap assist around an enemy
PLAYER_TAP_MARGIN = 10

# Spawning / difficulty
SPAWN_INTERVAL_BASE = 100
SPAWN_INTERVAL_MIN = 30
SPAWN_SCORE_DIVISOR = 50
DIFFICULTY_START = 1.0
DIFFICULTY_STEP = 0.1
DIFFICULTY_EVERY = 500    # frames

# Particles
EXPLOSION_SIZE = 8
PARTICLE_SPEED = 6.0      # velocity components drawn from [-3, 3)
PARTICLE_FRICTION = 0.98
PARTICLE_FADE = 0.02
PARTICLE_MIN_RADIUS = 2.0
PARTICLE_RADIUS_SPREAD = 3.0

# Shockwave
SHOCKWAVE_START_RADIUS = 10.0
SHOCKWAVE_GROWTH = 15.0
SHOCKWAVE_FADE = 0.03

# Cosmetic
DAMAGE_FLASH_SECONDS = 0.05

# Colors (RGB)
TAP_KILL_COLOR = (241, 196, 15)     # gold spark
PLAYER_HIT_COLOR = (231, 76, 60)    # blood red
ROAR_KILL_COLOR = (85, 85, 85)
SHOCKWAVE_COLOR = (241, 196, 15)
LION_COLOR = (241, 196, 15)
MANE_COLOR = (192, 57, 43)
ENEMY_COLOR = (52, 73, 94)
EYE_COLOR = (255, 0, 0)
AURA_COLOR = (255, 215, 0)
BACKGROUND_COLOR = (18, 18, 22)
