import re

REGION_PREFIXES = (
    "Lower_Extremity_Bones_",
    "Upper_Extremity_Bones_",
    "Pelvis_Bones_",
    "Skull_Bones_",
    "Spine_Bones_",
    "bones_",
    "arteries_",
    "veins_",
    "nerves_",
    "muscles_",
    "organs_",
)

VARIANT_SUFFIXES = ("_L", "_R", "_001", "_002", "_003", "_004", "_005")


def format_mesh_name_to_display_name(mesh_name: str) -> str:
    """
    Turns an exported mesh name into a readable label.

    >>> format_mesh_name_to_display_name("Upper_Extremity_Bones_humerus_L_001")
    'Humerus (L)'
    """
    name = mesh_name
    for prefix in REGION_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix):]
            break

    # only one suffix is stripped, so "x_L_001" keeps its side marker
    for suffix in VARIANT_SUFFIXES:
        if name.endswith(suffix):
            name = name[: -len(suffix)]
            break

    name = re.sub(r"_L$", " (L)", name)
    name = re.sub(r"_R$", " (R)", name)
    name = name.replace("_", " ")
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), name)
