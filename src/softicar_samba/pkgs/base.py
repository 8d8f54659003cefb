from abc import ABC, abstractmethod


class PackageManager(ABC):
    @abstractmethod
    def refresh(self):
        pass

    @abstractmethod
    def install(self, package):
        pass
