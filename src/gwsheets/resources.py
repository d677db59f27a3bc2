from dataclasses import asdict,fields,is_dataclass
from typing import List

class GoogleWorkSpaceResourceBase():
    """
    Intended to be subclassed by a dataclass but isnt actually a dataclass.
    Subclasses with nested resources override fixup() to coerce raw dicts
    coming back from the client into the proper dataclass.
    """
    @classmethod
    def from_base(cls, base: dict|None):
        """
        Build from a raw client dict, ignoring keys the dataclass doesn't
        know about as the API adds fields over time.
        """
        names = {f.name for f in fields(cls)} if is_dataclass(cls) else set()
        return cls(**{k: v for k, v in dict(base or {}).items() if k in names})

    def to_base(self) -> dict:
        """
        Return the dict representation of the object as needed by the
        GWS client.  Something with nested resources can override.
        """
        self.fixup()
        return asdict(self)
    
    def trim(self) -> dict:
        """
        Return a 'trimmed' dict of the resource, that is with top level attributes
        that are None or an empty string/container removed.  Numbers and bools
        are kept as 0 and False are meaningful values.
        Used for requests that only want filled-in fields.
        """
        b = self.to_base()
        for k,v in list(b.items()):
            if v is None or (type(v) not in [int,bool,float] and not v):
                del b[k]
        return b
    
    def fixup(self) -> None:
        """
        notify a subclass to do any field adjustments
        """
        pass
    
    def update_fields(self, **kwargs) -> List[str]:
        """
        Update fields that may be present, ignoring None values and
        unknown names.  Returns the names of the fields actually set.
        """
        updated_fields = []
        if is_dataclass(self):
            names = {f.name for f in fields(self)}
            for k,v in kwargs.items():
                if v is not None and k in names:
                    setattr(self, k, v)
                    updated_fields.append(k)
            self.fixup()
        return updated_fields
