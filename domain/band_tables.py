"""
Domain Layer - Channel Number to Band Tables
File: domain/band_tables.py

Row order is significant: the NR plan has overlapping ranges
(n2/n34, n77/n78/n257, n25/n70/n66, n5/n26/n20, n13/n14/n18/n28)
and lookups return the first declared match.
"""

from domain.models import BandRange, Generation


# (low EARFCN, high EARFCN, band)
_LTE_ROWS = (
    (0, 599, 1),
    (600, 1199, 2),
    (1200, 1949, 3),
    (1950, 2399, 4),
    (2400, 2649, 5),
    (2650, 2749, 6),
    (2750, 3449, 7),
    (3450, 3799, 8),
    (3800, 4149, 9),
    (4150, 4749, 10),
    (4750, 4949, 11),
    (5010, 5179, 12),
    (5180, 5279, 13),
    (5280, 5379, 14),
    (5730, 5849, 17),
    (5850, 5999, 18),
    (6000, 6149, 19),
    (6150, 6449, 20),
    (6450, 6599, 21),
    (6600, 7399, 22),
    (7500, 7699, 23),
    (7700, 8039, 24),
    (8040, 8689, 25),
    (8690, 9039, 26),
    (9040, 9209, 27),
    (9210, 9659, 28),
    (9660, 9769, 29),
    (9770, 9869, 30),
    (9870, 9919, 31),
    # TDD
    (36000, 36199, 33),
    (36200, 36349, 34),
    (36350, 36949, 35),
    (36950, 37549, 36),
    (37550, 37749, 37),
    (37750, 38249, 38),
    (38250, 38649, 39),
    (38650, 39649, 40),
    (39650, 41589, 41),
    (41590, 43589, 42),
    (43590, 45589, 43),
    (45590, 46589, 44),
    (46590, 46789, 45),
    (46790, 54539, 46),
    (54540, 55239, 47),
    (55240, 56739, 48),
    (56740, 58239, 49),
    (58240, 59089, 50),
    (59090, 59139, 51),
    (59140, 60139, 52),
    (60140, 60254, 53),
    # Extended EARFCN space
    (65536, 66435, 65),
    (66436, 67335, 66),
    (67336, 67535, 67),
    (67536, 67835, 68),
    (68336, 68585, 70),
    (68586, 68935, 71),
    (68936, 68985, 72),
    (68986, 69035, 73),
    (69036, 69465, 74),
    (69466, 70315, 85),
)

# (low NR-ARFCN, high NR-ARFCN, band)
_NR_ROWS = (
    (422000, 434000, 1),
    (386000, 398000, 2),
    (361000, 376000, 3),
    (173800, 178800, 5),
    (524000, 538000, 7),
    (185000, 192000, 8),
    (145800, 149200, 12),
    (151600, 153600, 13),
    (157600, 161600, 14),
    (158200, 164200, 18),
    (172000, 175000, 20),
    (285400, 286400, 25),
    (171800, 178800, 26),
    (151600, 160600, 28),
    (386000, 398000, 34),
    (402000, 405000, 38),
    (376000, 384000, 39),
    (460000, 480000, 40),
    (499200, 537999, 41),
    (514080, 524000, 48),
    (286400, 303400, 66),
    (285400, 286400, 70),
    (295000, 303600, 71),
    (620000, 680000, 77),
    (620000, 653333, 78),
    (693334, 733333, 79),
    # mmWave
    (620000, 680000, 257),
    (2016667, 2070832, 258),
    (2229166, 2279165, 260),
    (2070833, 2084999, 261),
)


def _build(generation: Generation, rows) -> tuple[BandRange, ...]:
    return tuple(
        BandRange(generation=generation, low_channel=low, high_channel=high, band_id=band)
        for low, high, band in rows
    )


LTE_BAND_RANGES = _build(Generation.LTE, _LTE_ROWS)
NR_BAND_RANGES = _build(Generation.NR, _NR_ROWS)


class BandTables:
    """Read-only access to the per-generation band tables."""

    _TABLES = {
        Generation.LTE: LTE_BAND_RANGES,
        Generation.NR: NR_BAND_RANGES,
    }

    @staticmethod
    def for_generation(generation: Generation) -> tuple[BandRange, ...]:
        """Return the ordered table for a generation (empty if it has none)."""
        return BandTables._TABLES.get(generation, ())
