"""Command-line tools of the muon decay analysis.

- `cli.py`: data reduction of a raw event file into histograms (`mudecay`)
- `fit.py`: fits of the decay time spectra (`mudecay-fit`)
"""
