class SoundSyncError(RuntimeError):
    pass

class SourceRootMissingError(SoundSyncError):
    pass

class NormalizationError(SoundSyncError):
    pass

class MimeDetectionError(SoundSyncError):
    pass

class ConfigError(SoundSyncError):
    pass
