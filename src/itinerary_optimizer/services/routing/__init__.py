"""Route ordering: nearest-neighbour seeding, 2-opt refinement and lock handling."""
