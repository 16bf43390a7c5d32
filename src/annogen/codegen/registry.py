from annogen.models import FullFunction, GeneratedFile


class GenerationContext:
    """Output files accumulated by handlers over one generation run.

    Keys are output paths relative to the output directory.
    """

    def __init__(self) -> None:
        self.files: dict[str, GeneratedFile] = {}

    def file(self, name: str) -> GeneratedFile:
        if name not in self.files:
            self.files[name] = GeneratedFile()
        return self.files[name]

    def function(self, file_name: str, function_name: str) -> FullFunction:
        return self.file(file_name).function(function_name)

    def __contains__(self, name: object) -> bool:
        return name in self.files

    def __len__(self) -> int:
        return len(self.files)
