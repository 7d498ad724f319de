from .face_angle_segmentation import segment_mesh_face_angles
