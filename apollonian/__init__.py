from .circle import Circle, as_point
from .classify import (
    classify_interior,
    classify_peripheral,
    classify_root,
    point_inside_triangle,
    point_left_of_line,
)
from .config import CENTER_OFFSET, GasketConfig, get_gasket_config, set_gasket_config
from .descartes import MINUS, PLUS, fourth_center, fourth_curvature, solve_tangent
from .errors import DegenerateConfiguration, GasketError, InvalidCurvature, ResourceLimitExceeded
from .gasket import (
    OUTSIDE,
    Gasket,
    GasketStats,
    SeedSpec,
    build,
    circle_array,
    enumerate_circles,
    locate,
    shade,
    shade_points,
    subdivide,
)
from .nodes import InteriorNode, PeripheralNode, RegionNode, SubdivisionBudget

__all__ = [
    'Circle',
    'as_point',
    'classify_interior',
    'classify_peripheral',
    'classify_root',
    'point_inside_triangle',
    'point_left_of_line',
    'CENTER_OFFSET',
    'GasketConfig',
    'get_gasket_config',
    'set_gasket_config',
    'MINUS',
    'PLUS',
    'fourth_center',
    'fourth_curvature',
    'solve_tangent',
    'DegenerateConfiguration',
    'GasketError',
    'InvalidCurvature',
    'ResourceLimitExceeded',
    'OUTSIDE',
    'Gasket',
    'GasketStats',
    'SeedSpec',
    'build',
    'circle_array',
    'enumerate_circles',
    'locate',
    'shade',
    'shade_points',
    'subdivide',
    'InteriorNode',
    'PeripheralNode',
    'RegionNode',
    'SubdivisionBudget',
]
