"""Before and after comparison of GATK base quality score recalibration.
"""
