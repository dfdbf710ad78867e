"""Grid defaults, spread ranges and the fixed cell mesh layout."""

EMPTY = 0.0
FULL = 1.0
DEFAULT_NX, DEFAULT_NZ = 30, 30
# Driver ranges: radius integer in [lo, hi), amount uniform in [lo, hi].
DEFAULT_RADIUS_RANGE = (1, 5)
DEFAULT_AMOUNT_RANGE = (0.1, 0.3)

# Cell mesh: 8 corners + 6 face middles; each face a 4-triangle fan.
CORNER_COUNT = 8
FACE_COUNT = 6
VERTEX_COUNT = CORNER_COUNT + FACE_COUNT
TRIANGLES_PER_FACE = 4
FRONT_TRIANGLE_COUNT = FACE_COUNT * TRIANGLES_PER_FACE
# Outward triangles followed by their reversed twins (double-sided).
INDEX_COUNT = FRONT_TRIANGLE_COUNT * 3 * 2
# Peak horizontal pinch of the top corners, reached at half fill.
MAX_TOP_INSET = 1.0 / 3.0
