"""High level code for driving the recalibration comparison pipeline.

  - main.py: Run the stages in order and report failures.
  - run_info.py: Build the run description and output file names from configuration.
  - summary.py: Write the text report once all stages finished.
"""
