"""
controlled vocabularies, sequence helpers and the namespace class used for the package settings
"""
import argparse
import os
import re

from Bio.Seq import Seq


def cast_boolean(input_value):
    """
    cast a string or other value to a boolean

    Example:
        >>> cast_boolean('yes')
        True
        >>> cast_boolean('0')
        False
    """
    value = str(input_value).lower()
    if value in ['t', 'true', '1', 'y', 'yes', 'on']:
        return True
    elif value in ['f', 'false', '0', 'n', 'no', 'off']:
        return False
    raise TypeError('casting to boolean failed', input_value)


class SvallocNamespace:
    """
    Namespace to hold module constants and settings. Each member may carry a definition, the type used to cast
    it from a string, and whether it may be None or a list

    Example:
        >>> nspace = SvallocNamespace(thing=1, otherthing=2)
        >>> nspace.thing
        1
    """
    DELIM = r'[;,\s]+'
    """:class:`str`: delimiter used in parsing listable variables from the environment"""
    ENV_PREFIX = 'SVALLOC'

    def __init__(self, *pos, **kwargs):
        for private in ['_defns', '_types', '_members']:
            object.__setattr__(self, private, {})
        for private in ['_nullable', '_listable']:
            object.__setattr__(self, private, set())
        for attr, value in [(k, k) for k in pos] + list(kwargs.items()):
            if attr in self._members:
                raise AttributeError('Cannot respecify existing attribute', attr, self._members[attr])
            self.add(attr, value)

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__, ', '.join(sorted(['{}={}'.format(k, repr(v)) for k, v in self.items()])))

    def get_env_name(self, attr):
        """
        Example:
            >>> SvallocNamespace(a=1).get_env_name('a')
            'SVALLOC_A'
        """
        return '{}_{}'.format(self.ENV_PREFIX, attr).upper()

    def get_env_var(self, attr):
        """
        the value of the environment variable for an attribute, cast to the attribute type

        Raises:
            KeyError: the environment variable is not set
        """
        env = os.environ[self.get_env_name(attr)].strip()
        cast_type = self._types.get(attr, str)
        if attr in self._listable:
            return self.parse_listable_string(env, cast_type, attr in self._nullable)
        if attr in self._nullable and env.lower() == 'none':
            return None
        return cast_type(env)

    @classmethod
    def parse_listable_string(cls, string, cast_type=str, nullable=False):
        """
        Example:
            >>> SvallocNamespace.parse_listable_string('1,2;3', int)
            [1, 2, 3]
            >>> SvallocNamespace.parse_listable_string('1 none', int, True)
            [1, None]
        """
        string = string.strip()
        result = []
        for value in re.split(cls.DELIM, string) if string else []:
            result.append(None if nullable and value.lower() == 'none' else cast_type(value))
        return result

    def is_env_overwritable(self, attr):
        return False

    def __getattr__(self, attr):
        if attr.startswith('_'):
            raise AttributeError(attr)
        members = self._members
        if attr not in members:
            raise AttributeError('{} has no member {}'.format(self.__class__.__name__, attr))
        if self.is_env_overwritable(attr):
            try:
                return self.get_env_var(attr)
            except KeyError:
                pass
        return members[attr]

    def __setattr__(self, attr, value):
        if attr.startswith('_'):
            raise ValueError('cannot set private', attr)
        self._members[attr] = value

    def __getitem__(self, key):
        return getattr(self, key)

    def __setitem__(self, key, value):
        setattr(self, key, value)

    def __iter__(self):
        return iter(self.keys())

    def keys(self):
        return list(self._members)

    def values(self):
        return [self[k] for k in self._members]

    def items(self):
        return [(k, self[k]) for k in self._members]

    def get(self, key, *pos):
        """
        get a member, or the default (when given) if there is no such member

        Example:
            >>> SvallocNamespace(thing=1).get('other', 2)
            2
        """
        if len(pos) > 1:
            raise TypeError('too many arguments. get takes a single \'default\' value argument')
        try:
            return self[key]
        except AttributeError:
            if pos:
                return pos[0]
            raise

    def define(self, attr, *pos):
        return self._defns.get(attr, *pos) if pos else self._defns[attr]

    def add(self, attr, value, defn=None, cast_type=None, nullable=False, listable=False):
        """
        Add a member to the namespace

        Args:
            attr (str): name of the member
            value: the value of the member
            defn (str): the definition, used in documenting settings
            cast_type (callable): function used to cast the value from a string. Defaults to the type of the value
            nullable (bool): the member may be None
            listable (bool): the member may have multiple values

        Example:
            >>> nspace = SvallocNamespace()
            >>> nspace.add('thing', 1, cast_type=int, defn='I am a thing')
        """
        cast_type = cast_type or type(value)
        self._types[attr] = cast_boolean if cast_type == bool else cast_type
        if defn:
            self._defns[attr] = defn
        if nullable:
            self._nullable.add(attr)
        if listable:
            self._listable.add(attr)
        self[attr] = value

    def enforce(self, value):
        """
        Returns:
            the input value

        Raises:
            KeyError: the value is not a member value

        Example:
            >>> SvallocNamespace(thing=1).enforce(1)
            1
        """
        if value not in self.values():
            raise KeyError('value {0} is not a valid member of '.format(repr(value)), self.values())
        return value

    def reverse(self, value):
        """
        the key for a given value

        Raises:
            KeyError: the value is not assigned or not unique

        Example:
            >>> SvallocNamespace(thing=1).reverse(1)
            'thing'
        """
        result = [k for k in self.keys() if self[k] == value]
        if len(result) > 1:
            raise KeyError('could not reverse, the mapping is not unique', value, result)
        elif not result:
            raise KeyError('input value is not assigned to a key', value)
        return result[0]

    def __call__(self, value):
        try:
            return self.enforce(value)
        except KeyError:
            raise TypeError('Invalid value {} for {}. Must be a valid member: {}'.format(
                repr(value), self.__class__.__name__, self.values()))


def float_percentage(num):
    """
    cast input to a float in the range 0-100

    Raises:
        argparse.ArgumentTypeError: the input is not a number or is out of range
    """
    try:
        num = float(num)
    except ValueError:
        raise argparse.ArgumentTypeError('Must be a value between 0 and 100')
    if num < 0 or num > 100:
        raise argparse.ArgumentTypeError('Must be a value between 0 and 100')
    return num


DNA_BASES = 'ACGT'
""":class:`str`: the called (non-ambiguous) DNA bases"""


def reverse_complement(s):
    """
    wrapper for the Bio.Seq reverse_complement method

    Args:
        s (str): the input DNA sequence

    Returns:
        :class:`str`: the reverse complement of the input sequence

    Example:
        >>> reverse_complement('ATCCGGT')
        'ACCGGAT'
    """
    input_string = str(s)
    if not re.match('^[A-Za-z]*$', input_string):
        raise ValueError('unexpected sequence format. cannot reverse complement', input_string)
    return str(Seq(input_string).reverse_complement())


def complement(s):
    """
    Example:
        >>> complement('ATCG')
        'TAGC'
    """
    return str(Seq(str(s)).complement())


DIRECTION = SvallocNamespace(FORWARD='f', BACKWARD='b')
""":class:`SvallocNamespace`: holds controlled vocabulary for breakend directions

- ``FORWARD``: the reference before the break is retained, evidence anchors at the aligned end of the read
- ``BACKWARD``: the reference after the break is retained, evidence anchors at the aligned start of the read
"""
setattr(DIRECTION, 'ordinal', lambda x: 0 if DIRECTION.enforce(x) == DIRECTION.FORWARD else 1)

STRAND = SvallocNamespace(POS='+', NEG='-', NS='?')
""":class:`SvallocNamespace`: holds controlled vocabulary for allowed strand values

- ``POS``: the positive/forward strand
- ``NEG``: the negative/reverse strand
- ``NS``: strand is not specified
"""

PAIR_ORIENTATION = SvallocNamespace(FR='FR', RF='RF', TANDEM='TANDEM')
""":class:`SvallocNamespace`: expected orientation of the reads in a properly paired fragment

- ``FR``: reads face each other (illumina paired-end)
- ``RF``: reads face away from each other (mate pair libraries)
- ``TANDEM``: both reads are on the same strand
"""

EVIDENCE_TYPE = SvallocNamespace(
    SOFT_CLIP='soft clip',
    REALIGNED_SOFT_CLIP='realigned soft clip',
    DISCORDANT_PAIR='discordant read pair',
    UNMAPPED_MATE='unmapped mate read pair',
    REMOTE='remote',
    CALL='call'
)
""":class:`SvallocNamespace`: closed set of directed evidence variants

- ``SOFT_CLIP``: a read soft clipped at the breakend
- ``REALIGNED_SOFT_CLIP``: a soft clip whose clipped bases were realigned to the partner breakend
- ``DISCORDANT_PAIR``: a read pair mapped with an unexpected orientation or distance
- ``UNMAPPED_MATE``: a read pair with only one read mapped
- ``REMOTE``: breakpoint evidence viewed from its remote breakend
- ``CALL``: a breakpoint call (for example from assembly) used as evidence
"""
setattr(EVIDENCE_TYPE, 'is_read_pair', lambda x: x in [EVIDENCE_TYPE.DISCORDANT_PAIR, EVIDENCE_TYPE.UNMAPPED_MATE])

CIGAR = SvallocNamespace(M=0, I=1, D=2, N=3, S=4, H=5, P=6, X=8, EQ=7)  # noqa
""":class:`SvallocNamespace`: Enum-like. For readable cigar values

- ``M``: alignment match (can be a sequence match or mismatch)
- ``I``: insertion to the reference
- ``D``: deletion from the reference
- ``N``: skipped region from the reference
- ``S``: soft clipping (clipped sequences present in SEQ)
- ``H``: hard clipping (clipped sequences NOT present in SEQ)
- ``P``: padding (silent deletion from padded reference)
- ``EQ``: sequence match (=)
- ``X``: sequence mismatch

note: descriptions are taken from the `samfile documentation <https://samtools.github.io/hts-specs/SAMv1.pdf>`_
"""

SAM_TAG = SvallocNamespace(EDIT_DISTANCE='NM', MISMATCH_STRING='MD', SEGMENT_INDEX='FI')
""":class:`SvallocNamespace`: sam tags read by the evidence model"""
