"""Built-in catalogs for ATL08 and RSSMIF16D.

ATL08 holds the Ground Track 1 (left) variables that had UMM-Var records;
its edges represent dimension, coordinate and subset-control dependencies.
RSSMIF16D links each gridded science variable to its grid-dimension
variables (latitude, longitude and time).
"""

from __future__ import annotations

from vargraph.models.catalog import Catalog, DependencyEdge, Variable


def _edges(*pairs: tuple[int, int]) -> tuple[DependencyEdge, ...]:
    return tuple(DependencyEdge(origin, destination) for origin, destination in pairs)


ATL08 = Catalog(
    id="C1234714698-EEDTEST",
    name="ATL08",
    variables=(
        Variable("V1237330160-EEDTEST", "/gt1l/signal_photons/classed_pc_flag", "int16"),
        Variable("V1237330281-EEDTEST", "/gt1l/land_segments/dem_h", "float32"),
        Variable("V1237332028-EEDTEST", "/gt1l/land_segments/canopy/h_canopy", "float32"),
        Variable("V1237332356-EEDTEST", "/gt1l/land_segments/latitude", "float32"),
        Variable("V1237332501-EEDTEST", "/gt1l/land_segments/longitude", "float32"),
        Variable("V1240989290-EEDTEST", "/gt1l/signal_photons/delta_time", "float64"),
        Variable("V1240989293-EEDTEST", "/gt1l/signal_photons/classed_pc_indx", "int32"),
        Variable("V1240989295-EEDTEST", "/gt1l/signal_photons/d_flag", "int8"),
        Variable("V1240989297-EEDTEST", "/gt1l/signal_photons/ph_segment_id", "int32"),
        Variable("V1240989299-EEDTEST", "/gt1l/land_segments/delta_time", "float64"),
        Variable("V1240989301-EEDTEST", "/gt1l/land_segments/ph_ndx_beg", "int32"),
        Variable("V1240989303-EEDTEST", "/gt1l/land_segments/n_seg_ph", "int64"),
    ),
    edges=_edges(
        (0, 5), (6, 5), (7, 5), (8, 5),
        (5, 10), (5, 11),
        (10, 3), (10, 4), (10, 9),
        (11, 3), (11, 4), (11, 9),
        (1, 3), (1, 4), (1, 9),
        (2, 3), (2, 4), (2, 9),
        (3, 9), (4, 9), (9, 3), (9, 4), (4, 3), (3, 4),
    ),
)

RSSMIF16D = Catalog(
    id="C1238392622-EEDTEST",
    name="RSSMIF16D",
    variables=(
        Variable("V1238395074-EEDTEST", "atmosphere_water_vapor_content", "int16"),
        Variable("V1238395076-EEDTEST", "latitude", "float32"),
        Variable("V1238395077-EEDTEST", "rainfall_rate", "int16"),
        Variable("V1238395078-EEDTEST", "atmosphere_cloud_liquid_water_content", "int16"),
        Variable("V1238395080-EEDTEST", "longitude", "float32"),
        Variable("V1238395084-EEDTEST", "sst_dtime", "int16"),
        Variable("V1238395085-EEDTEST", "wind_speed", "int16"),
        Variable("V1238395086-EEDTEST", "time", "int16"),
    ),
    edges=_edges(
        (0, 1), (0, 4), (0, 7),
        (2, 1), (2, 4), (2, 7),
        (3, 1), (3, 4), (3, 7),
        (5, 1), (5, 4), (5, 7),
        (6, 1), (6, 4), (6, 7),
    ),
)

BUILTIN_CATALOGS: tuple[Catalog, ...] = (RSSMIF16D, ATL08)
