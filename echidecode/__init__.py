"""
# ECHI decoder

The Call Management System (CMS) of a telephony switch can export the call
history as binary files through the External Call History Interface (ECHI):
a file is an 8-byte header (version, sequence number) followed by fixed-length
records, one per call segment. This package turns such a file into CSV.

Each record goes through the same steps

 1. unpack(): the layout of the format version is applied to the bytes,
    integers and text fields become a flat sequence of values.

 2. splice(): the call flags, packed as a bit vector somewhere in the record,
    are inserted into the sequence as "0"/"1" values.

 3. corrections: a buggy DURATION is fixed, timestamps are formatted,
    some 16-bit fields are read as signed and the text fields are quoted.

 4. serialize(): the values are joined with commas.

The formats are described in echidecode.formats; decoding a file is a matter of

    from echidecode.decoder import decode_file

    decode_file('input.chr', 'output.csv')
"""
__version__ = '1.8.0'
