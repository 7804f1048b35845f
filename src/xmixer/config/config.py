import logging
import os
import platform

from configobj import ConfigObj, ConfigObjError, Section, flatten_errors
from configobj.validate import Validator

logger = logging.getLogger(__name__)

# The default extension for configuration files
config_extension = '.cfg'

# The base name of the mixer configuration files
default_name = 'xmixer'

# the schema files ship with this package
schema_directory = os.path.dirname(os.path.abspath(__file__))


def config_flavor(name, flavor=None):
    configname = name if not flavor else name + '.' + flavor
    return configname


def config_filename(name, directory=None):
    """
    Determines the location of a config file in the given directory, or the current directory if none is given.
    """
    config_file = os.path.join(directory or os.curdir, name + config_extension)
    return config_file


def load_config_file_base(file, must_exist=True):
    """
    Loads a configuration file
    :param file:        The configuration file to load
    :param must_exist:  when True, the file must exist or an exception is thrown.
    :return: The ConfigObj instance for the file.
    """
    try:
        return ConfigObj(file, interpolation='Template', file_error=must_exist) \
            if must_exist or os.path.exists(file) else ConfigObj()
    except ConfigObjError as e:
        raise type(e)(str(e) + ' at ' + file)


def config_flavor_file(name, directory, subpart=None) -> ConfigObj:
    """
    Loads a specialization of a config file. The configuration file is expected to be named
    after the base, followed by a period and then the specialization, if the specialization is given,
    otherwise just the base name. A missing file yields an empty configuration.
    """
    configname = config_flavor(name, subpart)
    file = config_filename(configname, directory)
    config = load_config_file_base(file, False)
    return config


def map_os_name(name):
    """
    >>> map_os_name('Windows')
    'windows'
    >>> map_os_name("Darwin")
    'osx'
    """
    name = name.lower()
    if name == 'darwin':
        name = 'osx'
    return name


def os_name():
    return map_os_name(platform.system())


def user_config_file(name):
    return os.path.expanduser('~/' + name + config_extension)


def validation_errors(config, result):
    """
    Describes the keys that failed validation, one "section/key: reason" entry per failure.
    """
    errors = []
    for section_list, key, error in flatten_errors(config, result):
        location = '/'.join(section_list + ([key] if key is not None else []))
        errors.append("%s: %s" % (location, error if error is not False else 'missing'))
    return errors


def load_config(name, directory=None, schema_dir=schema_directory):
    """
        Loads all the configuration files that relate to the given name.
        Configurations are merged in this order, later files overriding earlier ones:
        - the default specialization
        - the platform specialization
        - the user override in the home directory
        - the base configuration
        The merged configuration is then validated against the schema, which also supplies the defaults.
    :param directory: the location of the configuration files. Defaults to the current directory.
    :param schema_dir: the location of the schema file
    :return: the validated configuration
    """
    local_config = config_flavor_file(name, directory)
    default_config = config_flavor_file(name, directory, 'default')
    platform_config = config_flavor_file(name, directory, os_name())
    user_config = load_config_file_base(user_config_file(name), must_exist=False)
    schema_file = config_filename(config_flavor(name, 'schema'), schema_dir)
    config = ConfigObj(configspec=schema_file)
    config.merge(default_config)
    config.merge(platform_config)
    config.merge(user_config)
    config.merge(local_config)

    validator = Validator()
    result = config.validate(validator)
    if result is not True:
        raise ConfigObjError("the config file %s failed validation: %s"
                             % (name, "; ".join(validation_errors(config, result))))
    return config


def fetch_conf_path(conf: Section, path):
    """
    Retrieves the named configuration section
    :param conf:        The root configuration
    :param path:        An iterable that lists the names of the sections to resolve
    :return: The configuration section identified by the path, or None if any part of the path is missing.
    """
    for p in path:    # lookup specific section
        conf = conf.get(p, None)
        if conf is None:
            return
    return conf


def load_settings(name=default_name, directory=None) -> Section:
    """
    Loads the validated [connection] section, ready for MixerConnector.from_config().
    """
    config = load_config(name, directory)
    settings = fetch_conf_path(config, ('connection',))
    logger.debug("loaded connection settings for %s: %s" % (name, dict(settings)))
    return settings
