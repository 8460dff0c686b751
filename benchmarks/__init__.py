from .griewank import griewank
from .quadratic import plane, shifted_bowl, sphere_plus_five

PROBLEMS = {
    "griewank": griewank,
    "shifted_bowl": shifted_bowl,
    "sphere_plus_five": sphere_plus_five,
    "plane": plane,
}
