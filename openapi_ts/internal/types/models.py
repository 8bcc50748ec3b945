from typing import Union

from pydantic import BaseModel


class RequestItem(BaseModel):
    """Результат разбора одной операции документа"""

    name: str  # getXXX, postXXX, putXXX, deleteXXX, ...
    url: str
    method: str
    tag: str = "main"
    description: str = ""
    deprecated: bool = False

    # Шаблоны типов; пустая строка - типа нет
    request_path_type: str = ""
    request_query_type: str = ""
    request_body_type: str = ""
    request_body_is_form_data: bool = False
    response_type: str = ""


class CodeBlock(BaseModel):
    order: int = 0
    code: str = ""

    def __str__(self):
        return self.code.replace("\t", "  ")


class CodeFile(BaseModel):
    file_name: str

    imports: list[str] = []
    code_blocks: list["CodeBlock"] = []

    def __str__(self):
        return "\n".join(
            filter(
                bool,
                [
                    ("\n".join(self.imports) if self.imports else ""),
                    "".join(
                        map(
                            str,
                            sorted(self.code_blocks, key=lambda x: x.order, reverse=True),
                        )
                    ),
                ],
            )
        )

    def add_code_block(
        self, code_block: Union["CodeBlock", str], **kwargs
    ) -> "CodeFile":
        if isinstance(code_block, str):
            code_block = CodeBlock(code=code_block, **kwargs)

        self.code_blocks.append(code_block)
        return self


class Project(BaseModel):
    name: str
    files: list[CodeFile] = []

    def add_file(self, file_name: Union["CodeFile", str], **kwargs) -> "CodeFile":
        code_file = file_name

        if isinstance(file_name, str):
            code_file = CodeFile(file_name=file_name, **kwargs)

        self.files.append(code_file)
        return code_file
