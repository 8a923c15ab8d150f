from fixed_map.fixed_map import FixedMap, Lookup
from fixed_map.utils.pool import AllocationError
