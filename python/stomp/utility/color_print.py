"""
Colour-coded logging helpers. The escape codes follow the colorama
library.
"""
import logging
import traceback as tb

# Checked in order, so more specific module names come first.
COLOR_CODES = {
    'policy_improvement': 'lgreen',
    'stomp_optimizer': 'lblue',
    'policy': 'cyan',
    'cost': 'magenta',
    'default': 'white',
}


CSI = '\033['


def code_to_chars(code):
    return CSI + str(code) + 'm'


class AnsiCodes(object):
    def __init__(self):
        # Subclasses declare numeric class attributes, which are replaced by
        # their escape sequences on instantiation.
        for name in dir(self):
            if not name.startswith('_'):
                value = getattr(self, name)
                setattr(self, name, code_to_chars(value))


class AnsiFore(AnsiCodes):
    RED = 31
    MAGENTA = 35
    CYAN = 36
    WHITE = 37
    RESET = 39

    LIGHTBLACK_EX = 90
    LIGHTRED_EX = 91
    LIGHTGREEN_EX = 92
    LIGHTBLUE_EX = 94


Fore = AnsiFore()

_COLOR_MAP = {
    'red': Fore.RED,
    'white': Fore.WHITE,
    'magenta': Fore.MAGENTA,
    'cyan': Fore.CYAN,
    'gray': Fore.LIGHTBLACK_EX,
    'lred': Fore.LIGHTRED_EX,
    'lblue': Fore.LIGHTBLUE_EX,
    'lgreen': Fore.LIGHTGREEN_EX,
    None: Fore.RESET,
}


def get_color_code(fname):
    for code_dir in COLOR_CODES:
        if code_dir in fname:
            return COLOR_CODES[code_dir]
    return COLOR_CODES['default']


def color_string(msg, color=None):
    if color is None:
        fname, _, _, _ = tb.extract_stack()[-2]  # Get caller
        color = get_color_code(fname)
    return _COLOR_MAP[color] + msg + Fore.RESET


class ColorLogger(object):
    """ Wraps a standard logger and colours messages by module name. """
    def __init__(self, name):
        self.name = name
        self.logger = logging.getLogger(name)

    def info(self, msg, *frmat):
        msg = color_string(msg % frmat, color=get_color_code(self.name))
        self.logger.info(msg)

    def debug(self, msg, *frmat):
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        msg = color_string(msg % frmat, color=get_color_code(self.name))
        self.logger.debug(msg)

    def warning(self, msg, *frmat):
        msg = color_string(msg % frmat, color='red')
        self.logger.warning(msg)

    def error(self, msg, *frmat):
        msg = color_string(msg % frmat, color='lred')
        self.logger.error(msg)
