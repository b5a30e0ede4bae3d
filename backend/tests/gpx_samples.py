"""GPX documents shared by the test modules."""

import textwrap

# Three points, middle one without elevation
EXAMPLE_GPX = textwrap.dedent("""\
<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="gpxp-test" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <name>Example</name>
    <trkseg>
      <trkpt lat="45.1234" lon="-122.6789"><ele>10.2</ele><time>2024-10-05T01:02:03Z</time></trkpt>
      <trkpt lat="45.1236" lon="-122.6791"><time>2024-10-05T01:02:04Z</time></trkpt>
      <trkpt lat="45.1238" lon="-122.6795"><ele>12.7</ele><time>2024-10-05T01:02:05Z</time></trkpt>
    </trkseg>
  </trk>
</gpx>
""")

MULTI_TRACK_GPX = textwrap.dedent("""\
<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="gpxp-test">
  <trk>
    <name>First</name>
    <trkseg>
      <trkpt lat="25.0478" lon="121.5319"><ele>5.0</ele></trkpt>
      <trkpt lat="25.0480" lon="121.5321"><ele>7.5</ele></trkpt>
    </trkseg>
    <trkseg>
      <trkpt lat="25.1000" lon="121.6000"><ele>-3.25</ele></trkpt>
    </trkseg>
  </trk>
  <trk>
    <name>Second</name>
    <trkseg>
      <trkpt lat="-33.8688" lon="151.2093"></trkpt>
    </trkseg>
  </trk>
</gpx>
""")

EMPTY_GPX = textwrap.dedent("""\
<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="gpxp-test">
</gpx>
""")

NO_ELEVATION_GPX = textwrap.dedent("""\
<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="gpxp-test"><trk><trkseg>
  <trkpt lat="10.0" lon="20.0"></trkpt>
  <trkpt lat="10.5" lon="20.5"></trkpt>
</trkseg></trk></gpx>
""")

# Well-formed GPX without the XML declaration
NO_DECLARATION_GPX = textwrap.dedent("""\
<gpx version="1.1" creator="gpxp-test"><trk><trkseg>
  <trkpt lat="10.0" lon="20.0"><ele>1.0</ele></trkpt>
</trkseg></trk></gpx>
""")

MALFORMED_GPX = textwrap.dedent("""\
<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="gpxp-test"><trk><trkseg>
  <trkpt lat="10.0" lon="20.0"><ele>1.0</ele>
</trkseg></trk></gpx>
""")

NAN_LAT_GPX = textwrap.dedent("""\
<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="gpxp-test"><trk><trkseg>
  <trkpt lat="nan" lon="20.0"><ele>1.0</ele></trkpt>
</trkseg></trk></gpx>
""")

INF_ELE_GPX = textwrap.dedent("""\
<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="gpxp-test"><trk><trkseg>
  <trkpt lat="10.0" lon="20.0"><ele>inf</ele></trkpt>
</trkseg></trk></gpx>
""")

# Not GPX: the marker only appears inside a comment
KML_ROOT_GPX = textwrap.dedent("""\
<?xml version="1.0" encoding="UTF-8"?>
<kml><!-- <gpx --><trk><trkseg>
  <trkpt lat="1.0" lon="2.0"></trkpt>
</trkseg></trk></kml>
""")


def build_gpx(point_count: int) -> str:
    """Single-track GPX with ``point_count`` points."""
    points = "".join(
        f'<trkpt lat="{(i % 9000) / 100.0}" lon="{(i % 18000) / 100.0}"/>'
        for i in range(point_count)
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<gpx version="1.1" creator="gpxp-test"><trk><trkseg>'
        f"{points}"
        "</trkseg></trk></gpx>\n"
    )


def oversized_input(size: int) -> str:
    """ASCII text of exactly ``size`` bytes that passes the cheap header checks."""
    head = '<?xml version="1.0" encoding="UTF-8"?>\n<gpx version="1.1" creator="gpxp-test">'
    tail = "</gpx>"
    return head + " " * (size - len(head) - len(tail)) + tail
