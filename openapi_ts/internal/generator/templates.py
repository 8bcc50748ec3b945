class Templates:
    """Шаблоны для генерации файлов"""

    imports = """import type {{ AxiosRequestConfig }} from '{axios_types_from}'
import {{ httpClient }} from '{request_from}'
"""

    imports_ssr = """import type {{ AxiosRequestConfig }} from '{axios_types_from}'
import type {{ RequestContext }} from '{request_from}'
import {{ httpClient, requestSSR }} from '{request_from}'
"""

    function = """
export function {name}(options: {{ {args} }}){return_type} {{
  return {call}
}}
"""

    # Три уровня пространств имен: API > Scope > Group
    group_types = """declare namespace API {{
namespace {scope} {{
namespace {tag} {{
{body}
}}}}}}
"""

    # Документ целиком: API > Scope
    doc_types = """declare namespace API {{
namespace {scope} {{

{body}
}}}}
"""

    response_root = """interface {name}<T> {{
{props}}}
"""


templates = Templates()
