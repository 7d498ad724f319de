from .duplicate_scan import points_eq_with_tolerance, scan_for_duplicates
from .welding import compact_index_space, remove_vertices_by_index_set, replace_indices, weld
