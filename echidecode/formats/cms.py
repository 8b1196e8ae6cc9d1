'''
# ECHI record formats

The External Call History Interface of the Call Management System writes
one fixed-length record per call segment; each CMS release has extended the
record in some way and the version tag in the file header tells which layout
to use.

Integers are little-endian and unsigned, text fields are padded with spaces
or NULs. The call flags (ASSIST, AUDIO, CONFERENCE, ...) are packed in a bit
vector stored inside the record: its bytes are covered by a padding slot in
the older releases and overlap the 16-bit fields from R12 onward.

These tables describe an external binary protocol, don't touch them.
'''
from ..descriptor import FormatDescriptor
from ..fields import (
    StructField,
    StringField,
    PaddingField,
    ArrayField,
    BitVectorField,
)


def _columns(names):
    return names.split()


def UInt32(n=1):
    return ArrayField(StructField('I'), n=n)


def UInt16(n=1):
    return ArrayField(StructField('H'), n=n)


def UInt8(n=1):
    return ArrayField(StructField('B'), n=n)


def Text(length, n=1):
    return ArrayField(StringField(length), n=n)


# CMS R3V4 and below
R3V4 = FormatDescriptor(
    version=2,
    length=189,
    description='CMS R3V4 and below',
    columns=_columns('''
        CALLID ACWTIME ANSHOLDTIME CONSULTTIME DISPTIME DURATION SEGSTART
        SEGSTOP TALKTIME DISPIVECTOR DISPSPLIT FIRSTIVECTOR SPLIT1 SPLIT2 SPLIT3
        TKGRP ASSIST AUDIO CONFERENCE DA_QUEUED HOLDABN MALICIOUS OBSERVINGCALL
        TRANSFERRED ACD DISPOSITION DISPPRIORITY HELD SEGMENT EVENT1 EVENT2
        EVENT3 EVENT4 EVENT5 EVENT6 EVENT7 EVENT8 EVENT9 DISPVDN EQLOC FIRSTVDN
        ORIGLOGIN ANSLOGIN LASTOBSERVER DIALED_NUM CALLING_PTY LASTCWC
    '''),
    layout=[
        UInt32(9),
        UInt16(7),
        PaddingField(1),
        UInt8(14),
        Text(6), Text(10), Text(6),
        Text(10, n=3),
        Text(25), Text(13),
        PaddingField(17),
        Text(17),
    ],
    bits=BitVectorField(offset=50, n=8, index=16),
    signed=[10, 12, 13, 14],
    segment=28,
    strstart=37,
)

# CMS R3V5
R3V5 = FormatDescriptor(
    version=3,
    length=210,
    description='CMS R3V5',
    columns=_columns('''
        CALLID ACWTIME ANSHOLDTIME CONSULTTIME DISPTIME DURATION SEGSTART SEGSTOP
        TALKTIME DISPIVECTOR DISPSPLIT FIRSTIVECTOR SPLIT1 SPLIT2 SPLIT3 TKGRP
        ASSIST AUDIO CONFERENCE DA_QUEUED HOLDABN MALICIOUS OBSERVINGCALL
        TRANSFERRED AGT_RELEASED ACD DISPOSITION DISPPRIORITY HELD SEGMENT
        ANSREASON ORIGREASON DISPSKLEVEL EVENT1 EVENT2 EVENT3 EVENT4 EVENT5
        EVENT6 EVENT7 EVENT8 EVENT9 DISPVDN EQLOC FIRSTVDN ORIGLOGIN ANSLOGIN
        LASTOBSERVER DIALED_NUM CALLING_PTY LASTDIGITS LASTCWC CALLING_II
    '''),
    layout=[
        UInt32(9),
        UInt16(7),
        PaddingField(2),
        UInt8(17),
        Text(6), Text(10), Text(6),
        Text(10, n=3),
        Text(25), Text(13),
        Text(17, n=3),
    ],
    bits=BitVectorField(offset=50, n=9, index=16),
    signed=[10, 12, 13, 14],
    segment=29,
    strstart=41,
)

# CMS R3V6
R3V6 = FormatDescriptor(
    version=4,
    length=225,
    description='CMS R3V6',
    columns=_columns('''
        CALLID ACWTIME ANSHOLDTIME CONSULTTIME DISPTIME DURATION SEGSTART SEGSTOP
        TALKTIME NETINTIME ORIGHOLDTIME DISPIVECTOR DISPSPLIT FIRSTIVECTOR SPLIT1
        SPLIT2 SPLIT3 TKGRP ASSIST AUDIO CONFERENCE DA_QUEUED HOLDABN MALICIOUS
        OBSERVINGCALL TRANSFERRED AGT_RELEASED ACD DISPOSITION DISPPRIORITY HELD
        SEGMENT ANSREASON ORIGREASON DISPSKLEVEL EVENT1 EVENT2 EVENT3 EVENT4
        EVENT5 EVENT6 EVENT7 EVENT8 EVENT9 UCID DISPVDN EQLOC FIRSTVDN ORIGLOGIN
        ANSLOGIN LASTOBSERVER DIALED_NUM CALLING_PTY LASTDIGITS LASTCWC CALLING_II
    '''),
    layout=[
        UInt32(11),
        UInt16(7),
        PaddingField(2),
        UInt8(17),
        Text(21),
        Text(6), Text(10), Text(6),
        Text(10, n=3),
        Text(25), Text(13),
        Text(17, n=2),
        Text(3),
    ],
    bits=BitVectorField(offset=58, n=9, index=18),
    signed=[12, 14, 15, 16],
    segment=31,
    strstart=43,
)

# CMS R3V8
R3V8 = FormatDescriptor(
    version=5,
    length=233,
    description='CMS R3V8',
    columns=_columns('''
        CALLID ACWTIME ANSHOLDTIME CONSULTTIME DISPTIME DURATION SEGSTART SEGSTOP
        TALKTIME NETINTIME ORIGHOLDTIME DISPIVECTOR DISPSPLIT FIRSTIVECTOR
        SPLIT1 SPLIT2 SPLIT3 TKGRP EQ_LOCID ORIG_LOCID ANS_LOCID OBS_LOCID ASSIST
        AUDIO CONFERENCE DA_QUEUED HOLDABN MALICIOUS OBSERVINGCALL TRANSFERRED
        AGT_RELEASED ACD DISPOSITION DISPPRIORITY HELD SEGMENT ANSREASON ORIGREASON
        DISPSKLEVEL EVENT1 EVENT2 EVENT3 EVENT4 EVENT5 EVENT6 EVENT7 EVENT8 EVENT9
        UCID DISPVDN EQLOC FIRSTVDN ORIGLOGIN ANSLOGIN LASTOBSERVER DIALED_NUM
        CALLING_PTY LASTDIGITS LASTCWC CALLING_II
    '''),
    layout=[
        UInt32(11),
        UInt16(11),
        PaddingField(2),
        UInt8(17),
        Text(21),
        Text(6), Text(10), Text(6),
        Text(10, n=3),
        Text(25), Text(13),
        Text(17, n=2),
        Text(3),
    ],
    bits=BitVectorField(offset=66, n=9, index=22),
    signed=[12, 14, 15, 16],
    segment=35,
    strstart=48,
)

# CMS R11
R11 = FormatDescriptor(
    version=11,
    length=322,
    description='CMS R11',
    columns=_columns('''
        CALLID ACWTIME ANSHOLDTIME CONSULTTIME DISPTIME DURATION SEGSTART SEGSTOP
        TALKTIME NETINTIME ORIGHOLDTIME DISPIVECTOR DISPSPLIT FIRSTIVECTOR
        SPLIT1 SPLIT2 SPLIT3 TKGRP EQ_LOCID ORIG_LOCID ANS_LOCID OBS_LOCID ASSIST
        AUDIO CONFERENCE DA_QUEUED HOLDABN MALICIOUS OBSERVINGCALL TRANSFERRED
        AGT_RELEASED ACD DISPOSITION DISPPRIORITY HELD SEGMENT ANSREASON ORIGREASON
        DISPSKLEVEL EVENT1 EVENT2 EVENT3 EVENT4 EVENT5 EVENT6 EVENT7 EVENT8 EVENT9
        UCID DISPVDN EQLOC FIRSTVDN ORIGLOGIN ANSLOGIN LASTOBSERVER DIALED_NUM
        CALLING_PTY LASTDIGITS LASTCWC CALLING_II CWC1 CWC2 CWC3 CWC4 CWC5
    '''),
    layout=[
        UInt32(11),
        UInt16(11),
        PaddingField(2),
        UInt8(17),
        Text(21),
        Text(8), Text(10), Text(8),
        Text(10, n=3),
        Text(25), Text(13),
        Text(17, n=2),
        Text(3),
        Text(17, n=5),
    ],
    bits=BitVectorField(offset=66, n=9, index=22),
    signed=[12, 14, 15, 16],
    segment=35,
    strstart=48,
)

# CMS R12 to R15
R12 = FormatDescriptor(
    version=12,
    length=493,
    description='CMS R12 to R15',
    columns=_columns('''
        CALLID ACWTIME ANSHOLDTIME CONSULTTIME DISPTIME DURATION SEGSTART SEGSTOP
        TALKTIME NETINTIME ORIGHOLDTIME QUEUETIME RINGTIME DISPIVECTOR DISPSPLIT
        FIRSTVECTOR SPLIT1 SPLIT2 SPLIT3 TKGRP EQ_LOCID ORIG_LOCID ANS_LOCID
        OBS_LOCID UUI_LEN ASSIST AUDIO CONFERENCE DA_QUEUED HOLDABN MALICIOUS
        OBSERVINGCALL TRANSFERRED AGT_RELEASED ACD DISPOSITION DISPPRIORITY HELD
        SEGMENT ANSREASON ORIGREASON DISPSKLEVEL EVENT1 EVENT2 EVENT3 EVENT4
        EVENT5 EVENT6 EVENT7 EVENT8 EVENT9 UCID DISPVDN EQLOC FIRSTVDN ORIGLOGIN
        ANSLOGIN LASTOBSERVER DIALED_NUM CALLING_PTY LASTDIGITS LASTCWC CALLING_II
        CWC1 CWC2 CWC3 CWC4 CWC5 VDN2 VDN3 VDN4 VDN5 VDN6 VDN7 VDN8 VDN9 ASAI_UUI
    '''),
    layout=[
        UInt32(13),
        UInt16(12),
        PaddingField(2),
        UInt8(17),
        Text(21),
        Text(8), Text(10), Text(8),
        Text(10, n=3),
        Text(25), Text(13),
        Text(17), Text(17),
        Text(3),
        Text(17, n=5),
        Text(8, n=8),
        Text(96),
        PaddingField(1),  # the record ends with a byte nobody reads
    ],
    bits=BitVectorField(offset=76, n=9, index=25),
    signed=[14, 16, 17, 18],
    segment=38,
    strstart=51,
)

# CMS R16 and above
R16 = FormatDescriptor(
    version=16,
    length=615,
    description='CMS R16 and above',
    columns=_columns('''
        CALLID ACWTIME ANSHOLDTIME CONSULTTIME DISPTIME DURATION SEGSTART
        SEGSTART_UTC SEGSTOP SEGSTOP_UTC TALKTIME NETINTIME ORIGHOLDTIME QUEUETIME
        RINGTIME DISPIVECTOR DISPSPLIT FIRSTIVECTOR SPLIT1 SPLIT2 SPLIT3 TKGRP
        EQ_LOCID ORIG_LOCID ANS_LOCID OBS_LOCID UUI_LEN ASSIST AUDIO CONFERENCE
        DA_QUEUED HOLDABN MALICIOUS OBSERVINGCALL TRANSFERRED AGT_RELEASED ACD
        CALL_DISP DISPPRIORITY HELD SEGMENT ANSREASON ORIGREASON DISPSKLEVEL EVENT1
        EVENT2 EVENT3 EVENT4 EVENT5 EVENT6 EVENT7 EVENT8 EVENT9 UCID DISPVDN EQLOC
        FIRSTVDN ORIGLOGIN ANSLOGIN LASTOBSERVER DIALED_NUM CALLING_PTY LASTDIGITS
        LASTCWC CALLING_II CWC1 CWC2 CWC3 CWC4 CWC5 VDN2 VDN3 VDN4 VDN5 VDN6 VDN7
        VDN8 VDN9 ASAI_UUI INTERRUPTDEL AGENTSURPLUS AGENTSKILLLEVEL PREFSKILLLEVEL
    '''),
    layout=[
        UInt32(15),
        UInt16(12),
        PaddingField(2),
        UInt8(17),
        Text(21),
        Text(16), Text(10),
        Text(16, n=4),
        Text(25), Text(25),
        Text(17), Text(17),
        Text(3),
        Text(17, n=5),
        Text(16, n=8),
        Text(96),
        UInt8(4),
        PaddingField(1),
    ],
    bits=BitVectorField(offset=76, n=9, index=27),
    signed=[16, 18, 19, 20],
    segment=40,
    strstart=53,
    strstop=78,
)

# CMS R16.3 and above
R16_3 = FormatDescriptor(
    version=163,
    length=617,
    description='CMS R16.3 and above',
    columns=_columns('''
        CALLID ACWTIME ANSHOLDTIME CONSULTTIME DISPTIME DURATION SEGSTART
        SEGSTART_UTC SEGSTOP SEGSTOP_UTC TALKTIME NETINTIME ORIGHOLDTIME QUEUETIME
        RINGTIME DISPIVECTOR DISPSPLIT FIRSTIVECTOR SPLIT1 SPLIT2 SPLIT3 TKGRP
        EQ_LOCID ORIG_LOCID ANS_LOCID OBS_LOCID UUI_LEN ASSIST AUDIO CONFERENCE
        DA_QUEUED HOLDABN MALICIOUS OBSERVINGCALL TRANSFERRED AGT_RELEASED ACD
        CALL_DISP DISPPRIORITY HELD SEGMENT ANSREASON ORIGREASON DISPSKLEVEL EVENT1
        EVENT2 EVENT3 EVENT4 EVENT5 EVENT6 EVENT7 EVENT8 EVENT9 UCID DISPVDN EQLOC
        FIRSTVDN ORIGLOGIN ANSLOGIN LASTOBSERVER DIALED_NUM CALLING_PTY LASTDIGITS
        LASTCWC CALLING_II CWC1 CWC2 CWC3 CWC4 CWC5 VDN2 VDN3 VDN4 VDN5 VDN6 VDN7
        VDN8 VDN9 ASAI_UUI INTERRUPTDEL AGENTSURPLUS AGENTSKILLLEVEL PREFSKILLLEVEL
        ICRRESENT ICRPULLREASON
    '''),
    layout=[
        UInt32(15),
        UInt16(12),
        PaddingField(2),
        UInt8(17),
        Text(21),
        Text(16), Text(10),
        Text(16, n=4),
        Text(25), Text(25),
        Text(17), Text(17),
        Text(3),
        Text(17, n=5),
        Text(16, n=8),
        Text(96),
        UInt8(6),
        PaddingField(1),
    ],
    bits=BitVectorField(offset=76, n=9, index=27),
    signed=[16, 18, 19, 20],
    segment=40,
    strstart=53,
    strstop=78,
)

# CMS R17 and above
R17 = FormatDescriptor(
    version=170,
    length=629,
    description='CMS R17 and above',
    columns=_columns('''
        CALLID ACWTIME ANSHOLDTIME CONSULTTIME DISPTIME DURATION SEGSTART
        SEGSTART_UTC SEGSTOP SEGSTOP_UTC TALKTIME NETINTIME ORIGHOLDTIME QUEUETIME
        RINGTIME ORIG_ATTRIB_ID ANS_ATTRIB_ID OBS_ATTRIB_ID DISPIVECTOR DISPSPLIT
        FIRSTIVECTOR SPLIT1 SPLIT2 SPLIT3 TKGRP EQ_LOCID ORIG_LOCID ANS_LOCID
        OBS_LOCID UUI_LEN ASSIST AUDIO CONFERENCE DA_QUEUED HOLDABN MALICIOUS
        OBSERVINGCALL TRANSFERRED AGT_RELEASED ACD CALL_DISP DISPPRIORITY
        HELD SEGMENT ANSREASON ORIGREASON DISPSKLEVEL EVENT1 EVENT2 EVENT3
        EVENT4 EVENT5 EVENT6 EVENT7 EVENT8 EVENT9 UCID DISPVDN EQLOC FIRSTVDN
        ORIGLOGIN ANSLOGIN LASTOBSERVER DIALED_NUM CALLING_PTY LASTDIGITS LASTCWC
        CALLING_II CWC1 CWC2 CWC3 CWC4 CWC5 VDN2 VDN3 VDN4 VDN5 VDN6 VDN7 VDN8
        VDN9 ASAI_UUI INTERRUPTDEL AGENTSURPLUS AGENTSKILLLEVEL PREFSKILLLEVEL
        ICRRESENT ICRPULLREASON
    '''),
    layout=[
        UInt32(18),
        UInt16(12),
        PaddingField(2),
        UInt8(17),
        Text(21),
        Text(16), Text(10),
        Text(16, n=4),
        Text(25), Text(25),
        Text(17), Text(17),
        Text(3),
        Text(17, n=5),
        Text(16, n=8),
        Text(96),
        UInt8(6),
        PaddingField(1),
    ],
    bits=BitVectorField(offset=76, n=9, index=30),
    signed=[19, 21, 22, 23],
    segment=43,
    strstart=56,
    strstop=81,
)
