"""
functions to access the run information dictionary in a clearer way
"""

import toolz as tz

DEFAULT_OUT_DIR = "./bqsr_complete_analysis"

LOOKUPS = {
    "config": {"keys": ["config"]},
    "sample_name": {"keys": ["sample_name"]},
    "align_bam": {"keys": ["align_bam"]},
    "out_dir": {"keys": ["out_dir"], "default": DEFAULT_OUT_DIR},
    "ref_file": {"keys": ["reference", "fasta"]},
    "known_sites": {"keys": ["known_sites"], "always_list": True},
    "existing_recal_bam": {"keys": ["existing", "recal_bam"]},
    "existing_before_table": {"keys": ["existing", "before_table"]},
    "tmp_dir": {"keys": ["config", "resources", "tmp", "dir"]},
    "before_table": {"keys": ["outputs", "before_table"]},
    "recal_bam": {"keys": ["outputs", "recal_bam"]},
    "after_table": {"keys": ["outputs", "after_table"]},
    "plots": {"keys": ["outputs", "plots"]},
    "summary": {"keys": ["outputs", "summary"]},
}

def getter(keys, global_default=None, always_list=False):
    def lookup(config, default=None):
        default = global_default if not default else default
        val = tz.get_in(keys, config, default)
        if always_list:
            if not val:
                val = []
            elif not isinstance(val, (list, tuple)): val = [val]
        return val
    return lookup

def setter(keys):
    def update(config, value):
        return tz.update_in(config, keys, lambda x: value, default=value)
    return update

def is_setter(keys):
    def present(config):
        value = tz.get_in(keys, config)
        return True if value else False
    return present

"""
generate the getter and setter functions but don't override any explicitly
defined
"""
_g = globals()
for k, v in LOOKUPS.items():
    keys = v['keys']
    getter_fn = 'get_' + k
    if getter_fn not in _g:
        _g["get_" + k] = getter(keys, v.get('default', None), v.get("always_list", False))
    setter_fn = 'set_' + k
    if setter_fn not in _g:
        _g["set_" + k] = setter(keys)
    is_setter_fn = "is_set_" + k
    if is_setter_fn not in _g:
        _g["is_set_" + k] = is_setter(keys)

def get_keys(lookup):
    """
    return the keys used to look up a function in the datadict
    """
    return LOOKUPS[lookup]["keys"]
