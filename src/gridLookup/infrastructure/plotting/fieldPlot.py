import numpy as np
from numpy.typing import NDArray
import matplotlib.pyplot as plt

from gridLookup.domain import SpatialValueProvider
from gridLookup.infrastructure.sampleTable import SampleTable


def sample_grid(
    provider: SpatialValueProvider,
    table: SampleTable,
    resolution: int = 100,
) -> tuple[NDArray, NDArray, NDArray]:
    """
    Evaluate the provider on a regular grid (Δlat = Δlon) covering the table.

    `resolution` is the maximum number of points in one direction.
    """
    if resolution < 2:
        raise ValueError("resolution must be at least 2")

    lat_min, lat_max, lon_min, lon_max = table.domain_range()
    span = max(lat_max - lat_min, lon_max - lon_min)
    if span == 0:
        LAT = np.array([[lat_min]])
        LON = np.array([[lon_min]])
        return LAT, LON, provider.values_at_points(LAT, LON)

    Δ = span / (resolution - 1)
    lats = np.arange(lat_min, lat_max + 0.5 * Δ, Δ)
    lons = np.arange(lon_min, lon_max + 0.5 * Δ, Δ)
    LON, LAT = np.meshgrid(lons, lats, indexing="xy")
    return LAT, LON, provider.values_at_points(LAT, LON)


def visualize(
    provider: SpatialValueProvider,
    table: SampleTable,
    resolution: int = 100,
    show: bool = True,
    label: str = "Value",
    invalid_value: float = -9999.0,
):
    """Quick map of the interpolated field with the eligible samples on top."""
    LAT, LON, Z = sample_grid(provider, table, resolution)
    lat_min, lat_max, lon_min, lon_max = table.domain_range()

    fig, ax = plt.subplots(figsize=(6, 5))

    im = ax.imshow(
        Z,
        extent=(lon_min, lon_max, lat_min, lat_max),
        origin="lower",
        cmap="viridis",
        interpolation="bilinear",
    )
    mask = table.eligible_mask(invalid_value)
    ax.scatter(table.longitudes[mask], table.latitudes[mask], s=4, c="k", marker=".")
    ax.scatter(table.longitudes[~mask], table.latitudes[~mask], s=8, c="r", marker="x")
    ax.set_xlabel("Longitude [deg]")
    ax.set_ylabel("Latitude [deg]")
    ax.set_aspect("equal")
    plt.colorbar(im, ax=ax, label=label)

    if show:
        plt.show()
    else:
        return fig, ax, im
