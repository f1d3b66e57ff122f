"""Signal Lab: filtering, spectrum analysis and grip/rest classification.

The usual entry points are :func:`signallab.dataio.normalize_json` /
:func:`signallab.dataio.parse_delimited_text` to ingest a recording and
:func:`signallab.core.pipeline.run_pipeline` to analyse one of its channels.
"""

__version__ = "0.1.0"
