""" Logging"""
import logging


class rosapilogger(object):
    """ Logging for RouterOS API"""

    def __init__(self, debug_level, name='RouterOS'):
        """ Logging for RouterOS API"""
        self.logger_level = self._get_logging_level(debug_level)
        self.name = name

    def getLogger(self):
        """ Logging for RouterOS API"""
        # create logger
        logger = logging.getLogger(self.name)
        logger.setLevel(self.logger_level)

        # one handler per logger, however many clients share it
        for h in logger.handlers:
            if getattr(h, '_rosapi', False):
                h.setLevel(self.logger_level)
                return logger

        ch = logging.StreamHandler()
        ch.setLevel(self.logger_level)
        ch._rosapi = True

        # create formatter
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

        # add formatter to ch
        ch.setFormatter(formatter)

        # add ch to logger
        logger.addHandler(ch)

        return logger

    def _get_logging_level(self, debug_level):
        """ Logging for RouterOS API"""
        if debug_level:
            return logging.DEBUG
        else:
            return logging.INFO
